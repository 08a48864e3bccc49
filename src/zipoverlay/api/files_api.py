"""
File operations for the zip overlay.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from zipoverlay.core.fs_types import ReadResult
from zipoverlay.core.logging import debug_print


class FilesAPI:
    """
    Public API: File Operations. This class is exposed as fs.files on ArchiveFS.
    This class is not meant to be used directly, but through ArchiveFS.
    """

    def __init__(self, archive_fs):
        self._fs = archive_fs.overlay

    def read_result(self, path: str) -> ReadResult:
        """Read a file, reporting failure as a ReadResult instead of raising."""
        return self._fs.read_file(path)

    def read(self, path: str) -> str:
        """
        Read the whole file as text. Works for host files and archive entries.

        Raises:
            FileNotFoundError: If the file exists neither on disk nor in an archive
            Exception: The original error if the file exists but cannot be read
        """
        result = self._fs.read_file(path)
        if result.canonical_error is not None:
            debug_print(f"[FilesAPI.read] {path}: {result.original_error}", level=2)
            raise result.original_error
        return result.value

    def exists(self, path: str) -> bool:
        """Check if a file exists and can be read."""
        return self._fs.read_file(path).ok
