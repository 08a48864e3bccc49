"""
Archive cache for the zip overlay.
Maps archive paths to their indexes, loading each archive at most once.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import threading
import zipfile
from typing import Callable, Dict, List, Optional

from .archive_index import ArchiveIndex
from .logging import debug_print


class ArchiveCache:
    """
    Table of archive path -> ArchiveIndex shared by every caller of an overlay.

    The table lock only guards lookup and insertion. The first caller for a
    path registers a placeholder index and loads it after releasing the lock;
    later callers find the placeholder and wait for the load to finish.
    Entries are never evicted, and a failed load stays failed.
    """

    def __init__(self, opener: Callable[[str], zipfile.ZipFile] = zipfile.ZipFile):
        self._opener = opener
        self._lock = threading.Lock()
        self._archives: Dict[str, ArchiveIndex] = {}

    def resolve(self, archive_path: str) -> Optional[ArchiveIndex]:
        """
        Get the index for an archive, loading it on first use.

        Args:
            archive_path: On-disk path of the archive

        Returns:
            The loaded index, or None if the archive could not be opened
        """
        with self._lock:
            index = self._archives.get(archive_path)
            owner = index is None
            if owner:
                index = ArchiveIndex(archive_path)
                self._archives[archive_path] = index

        if owner:
            debug_print(f"[ArchiveCache.resolve] Loading {archive_path}", level=2)
            index.load(self._opener)
        else:
            index.wait()

        if index.load_error is not None:
            return None
        return index

    def get(self, archive_path: str) -> Optional[ArchiveIndex]:
        """Return the cached index without loading anything."""
        with self._lock:
            return self._archives.get(archive_path)

    def archive_paths(self) -> List[str]:
        with self._lock:
            return list(self._archives)

    def close(self) -> None:
        """Close every open archive handle. Closed archives stay cached and report not-found."""
        with self._lock:
            indexes = list(self._archives.values())
        for index in indexes:
            index.close()

    def __contains__(self, archive_path: str) -> bool:
        with self._lock:
            return archive_path in self._archives

    def __len__(self) -> int:
        with self._lock:
            return len(self._archives)
