"""
Zip overlay for the host filesystem.
Serves paths like 'project/assets.zip/icons/logo.svg' from inside the archive
whenever the wrapped filesystem reports that the path does not exist.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

from typing import Optional, Tuple

from .archive_cache import ArchiveCache
from .archive_index import ArchiveIndex
from .fs_types import BaseFS, EntryKind, ModKey, ReadResult, WatchData
from .logging import debug_print
from .path_resolver import PathInfo, PathResolver
from .utils import is_not_found, not_found_error


class ZipOverlayFS(BaseFS):
    """
    BaseFS that falls back to zip archive contents.

    Only read_directory and read_file look inside archives; everything else is
    delegated to the wrapped filesystem unchanged.

    Args:
        inner: The filesystem consulted first for every request
        cache: Archive cache; a private one is created when omitted
        resolver: Path resolver locating the archive boundary
    """

    def __init__(self, inner: BaseFS, cache: Optional[ArchiveCache] = None,
                 resolver: Optional[PathResolver] = None):
        self.inner = inner
        self.cache = cache if cache is not None else ArchiveCache()
        self.resolver = resolver if resolver is not None else PathResolver()

    def _check_for_zip(self, path: str) -> Tuple[Optional[ArchiveIndex], Optional[PathInfo]]:
        path_info = self.resolver.resolve(path)
        if path_info is None:
            return None, None
        index = self.cache.resolve(path_info.archive_path)
        if index is None:
            debug_print(f"[ZipOverlayFS] Archive unusable: {path_info.archive_path}", level=2)
            return None, None
        return index, path_info

    def read_directory(self, path: str) -> ReadResult:
        result = self.inner.read_directory(path)
        if not is_not_found(result.canonical_error):
            return result

        index, path_info = self._check_for_zip(path)
        if index is None:
            return result

        entries = index.list_directory(path_info.get_entry_key(), path)
        if entries is None:
            err = not_found_error(path)
            return ReadResult(None, err, err)
        return ReadResult(entries, None, None)

    def read_file(self, path: str) -> ReadResult:
        result = self.inner.read_file(path)
        if not is_not_found(result.canonical_error):
            return result

        index, path_info = self._check_for_zip(path)
        if index is None:
            return result

        contents = index.read_file(path_info.get_entry_key())
        if contents is None:
            err = not_found_error(path)
            return ReadResult(None, err, err)
        return contents

    # --- Pass-through ---
    def open_file(self, path: str) -> ReadResult:
        return self.inner.open_file(path)

    def mod_key(self, path: str) -> ModKey:
        return self.inner.mod_key(path)

    def is_abs(self, path: str) -> bool:
        return self.inner.is_abs(path)

    def abs(self, path: str) -> Tuple[str, bool]:
        return self.inner.abs(path)

    def dir(self, path: str) -> str:
        return self.inner.dir(path)

    def base(self, path: str) -> str:
        return self.inner.base(path)

    def ext(self, path: str) -> str:
        return self.inner.ext(path)

    def join(self, *parts: str) -> str:
        return self.inner.join(*parts)

    def cwd(self) -> str:
        return self.inner.cwd()

    def rel(self, base: str, target: str) -> Tuple[str, bool]:
        return self.inner.rel(base, target)

    def kind(self, dir: str, base: str) -> Tuple[str, Optional[EntryKind]]:
        return self.inner.kind(dir, base)

    def watch_data(self) -> WatchData:
        return self.inner.watch_data()
