"""
Path resolution functionality for the zip overlay.
Finds the point where a path crosses into a zip archive.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import NamedTuple, Optional

from .utils import ZIP_SUFFIX


class PathInfo(NamedTuple):
    """Information about a path that crosses into an archive."""
    original_path: str
    archive_path: str
    entry_path: str

    def get_entry_key(self) -> str:
        """
        Get the lookup key of the entry within the archive.

        Returns:
            Lower-cased path relative to the archive root
        """
        return self.entry_path.lower()


class PathResolver:
    """
    Splits paths like 'project/assets.zip/icons/logo.svg' into the on-disk
    archive ('project/assets.zip') and the path inside it ('icons/logo.svg').
    Only the first archive boundary counts; archives are not nested.
    """

    def __init__(self, suffix: str = ZIP_SUFFIX):
        self.suffix = suffix.lower()

    def resolve(self, path: str) -> Optional[PathInfo]:
        """
        Resolve a path that may contain an archive boundary.

        Args:
            path: Path string, with either separator

        Returns:
            PathInfo for the archive and its tail, or None if the path does not
            cross into an archive
        """
        if not path:
            return None

        # Normalize path separators
        path = path.replace('\\', '/')
        lower_path = path.lower()

        boundary = lower_path.find(self.suffix + '/')
        if boundary != -1:
            end = boundary + len(self.suffix)
            return PathInfo(
                original_path=path,
                archive_path=path[:end],
                entry_path=path[end + 1:].strip('/'),
            )

        # The archive itself names its root directory
        trimmed = path.rstrip('/')
        if trimmed.lower().endswith(self.suffix) and len(trimmed) > len(self.suffix):
            return PathInfo(original_path=path, archive_path=trimmed, entry_path="")

        return None
