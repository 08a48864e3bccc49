"""
zipoverlay: transparent read access to zip archives

A Python library that lets a path cross into a zip archive as if the archive
had been extracted on disk.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT

Public API:
    - ArchiveFS: Main entry point. Provides .files, .dirs, .config namespaces.
    - ZipOverlayFS: The overlay itself, wrapping any BaseFS.
    - RealFS: BaseFS over the host filesystem.

Example usage:
    from zipoverlay import ArchiveFS
    fs = ArchiveFS()
    fs.dirs.list_dir('project/assets.zip/icons')
    svg = fs.files.read('project/assets.zip/icons/logo.svg')
"""

from .zipoverlay import ArchiveFS
from .core.archive_cache import ArchiveCache
from .core.fs_types import BaseFS, DirEntries, Entry, EntryKind, ReadResult
from .core.path_resolver import PathResolver
from .core.real_fs import RealFS
from .core.zip_fs import ZipOverlayFS

__version__ = '0.1.0'
__all__ = ["ArchiveFS", "ArchiveCache", "BaseFS", "DirEntries", "Entry", "EntryKind",
           "PathResolver", "ReadResult", "RealFS", "ZipOverlayFS"]
