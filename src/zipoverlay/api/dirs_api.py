"""
Directory operations for the zip overlay.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import List

from zipoverlay.core.fs_types import DirEntries
from zipoverlay.core.logging import debug_print


class DirsAPI:
    """
    Public API: Directory Operations. This class is exposed as fs.dirs on ArchiveFS.
    This class is not meant to be used directly, but through ArchiveFS.
    """

    def __init__(self, archive_fs):
        self._fs = archive_fs.overlay

    def entries(self, path: str) -> DirEntries:
        """
        Get the listing of a directory (physical or inside an archive).

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        result = self._fs.read_directory(path)
        if result.canonical_error is not None:
            debug_print(f"[DirsAPI.entries] {path}: {result.original_error}", level=2)
            raise result.original_error
        return result.value

    def list_dir(self, path: str) -> List[str]:
        """
        List the contents of a directory.

        Returns:
            Child names in their original case, sorted case-insensitively
        """
        return self.entries(path).names()

    def exists(self, path: str) -> bool:
        """Check if a directory exists (physical or inside an archive)."""
        return self._fs.read_directory(path).ok

    def is_dir(self, path: str) -> bool:
        return self.exists(path)
