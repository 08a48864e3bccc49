"""
zipoverlay: transparent read access to zip archives

This module combines the overlay filesystem and the public API namespaces
into a complete ArchiveFS class.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Optional

from .core.archive_cache import ArchiveCache
from .core.fs_types import BaseFS
from .core.real_fs import RealFS
from .core.zip_fs import ZipOverlayFS

from .api.files_api import FilesAPI
from .api.dirs_api import DirsAPI
from .api.config_api import ConfigAPI


class ArchiveFS:
    """
    Main entry point.
    Provides a namespaced API for reading files and directories, including
    those stored inside zip archives.

    Attributes:
        files: File operations (read, exists)
        dirs: Directory operations (list_dir, entries, exists)
        config: Configuration
        overlay: The underlying ZipOverlayFS
    """

    def __init__(self, base_fs: Optional[BaseFS] = None, cache: Optional[ArchiveCache] = None):
        self.base_fs = base_fs if base_fs is not None else RealFS()
        self.overlay = ZipOverlayFS(self.base_fs, cache=cache)
        self.files = FilesAPI(self)
        self.dirs = DirsAPI(self)
        self.config = ConfigAPI()

    @property
    def cache(self) -> ArchiveCache:
        return self.overlay.cache

    def close(self) -> None:
        """Close the archive handles held by the cache."""
        self.overlay.cache.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
