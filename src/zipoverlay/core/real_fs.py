"""
real_fs.py

Host filesystem backend for the zip overlay. All physical directory and
file reads go through RealFS; the overlay wraps it and only steps in when
RealFS reports that a path does not exist.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import stat
import threading
import time
from typing import Dict, Optional, Tuple

from .fs_types import (BaseFS, DirEntries, Entry, EntryKind, ModKey, ModKeyUnusableError,
                       OpenedFile, ReadResult, WatchData)
from .global_config import GlobalConfig
from .logging import debug_print
from .utils import canonicalize_error

# Files modified more recently than this may still be changing within the
# resolution of the filesystem clock.
MOD_KEY_SAFETY_GAP_NS = 1_000_000_000


class RealOpenedFile(OpenedFile):
    """Streaming handle over a host file."""

    def __init__(self, handle, size: int):
        self._handle = handle
        self._size = size
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return self._size

    def read(self, start: int, end: int) -> bytes:
        with self._lock:
            self._handle.seek(start)
            return self._handle.read(max(0, end - start))

    def close(self) -> None:
        self._handle.close()


class RealFS(BaseFS):
    """
    BaseFS over the host filesystem.

    Args:
        track_watch_data: Record every read so watch_data() can report changes
        cache_directories: Memoize directory listings for the lifetime of the instance
    """

    def __init__(self, track_watch_data: bool = False, cache_directories: bool = False):
        self._track_watch_data = track_watch_data
        self._cache_directories = cache_directories
        self._lock = threading.Lock()
        self._watch_paths = {}
        self._dir_cache: Dict[str, ReadResult] = {}

    # --- Reads ---
    def read_directory(self, path: str) -> ReadResult:
        if self._cache_directories:
            with self._lock:
                cached = self._dir_cache.get(path)
            if cached is not None:
                return cached

        debug_print(f"[RealFS.read_directory] path={path}", level=2)
        try:
            names = os.listdir(path)
        except OSError as e:
            result = ReadResult(None, canonicalize_error(e), e)
            names = None
        else:
            data = {name.lower(): Entry(dir=path, base=name) for name in names}
            result = ReadResult(DirEntries(path, data), None, None)

        if self._cache_directories:
            with self._lock:
                result = self._dir_cache.setdefault(path, result)
        if self._track_watch_data:
            self._watch_directory(path, names)
        return result

    def read_file(self, path: str) -> ReadResult:
        debug_print(f"[RealFS.read_file] path={path}", level=2)
        encoding, errors = GlobalConfig.get_text_encoding()
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except OSError as e:
            if self._track_watch_data:
                self._watch_file(path, None)
            return ReadResult(None, canonicalize_error(e), e)
        if self._track_watch_data:
            self._watch_file(path, data)
        try:
            contents = data.decode(encoding, errors)
        except (UnicodeDecodeError, LookupError) as e:
            debug_print(f"[RealFS.read_file] Cannot decode {path}: {e}", level=1, exc=e)
            return ReadResult(None, e, e)
        return ReadResult(contents, None, None)

    def open_file(self, path: str) -> ReadResult:
        debug_print(f"[RealFS.open_file] path={path}", level=2)
        try:
            handle = open(path, 'rb')
        except OSError as e:
            return ReadResult(None, canonicalize_error(e), e)
        try:
            size = os.fstat(handle.fileno()).st_size
        except OSError as e:
            handle.close()
            return ReadResult(None, canonicalize_error(e), e)
        return ReadResult(RealOpenedFile(handle, size), None, None)

    def mod_key(self, path: str) -> ModKey:
        st = os.stat(path)
        # Too recent to tell apart from a write that lands within the same tick
        if time.time_ns() - st.st_mtime_ns < MOD_KEY_SAFETY_GAP_NS:
            raise ModKeyUnusableError(path)
        return ModKey(
            inode=st.st_ino,
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            mode=st.st_mode,
            uid=getattr(st, 'st_uid', 0),
        )

    # --- Path arithmetic ---
    def is_abs(self, path: str) -> bool:
        return os.path.isabs(path)

    def abs(self, path: str) -> Tuple[str, bool]:
        try:
            return os.path.abspath(path), True
        except (OSError, ValueError) as e:
            debug_print(f"[RealFS.abs] Cannot make {path} absolute: {e}", level=1)
            return "", False

    def dir(self, path: str) -> str:
        return os.path.dirname(path)

    def base(self, path: str) -> str:
        return os.path.basename(path)

    def ext(self, path: str) -> str:
        return os.path.splitext(path)[1]

    def join(self, *parts: str) -> str:
        parts = [part for part in parts if part]
        if not parts:
            return ""
        return os.path.normpath(os.path.join(*parts))

    def cwd(self) -> str:
        return os.getcwd()

    def rel(self, base: str, target: str) -> Tuple[str, bool]:
        try:
            return os.path.relpath(target, base), True
        except ValueError:
            # Different drives on Windows
            return "", False

    def kind(self, dir: str, base: str) -> Tuple[str, Optional[EntryKind]]:
        entry_path = os.path.join(dir, base)
        symlink = ""
        try:
            st = os.lstat(entry_path)
            if stat.S_ISLNK(st.st_mode):
                symlink = os.path.realpath(entry_path)
                st = os.stat(symlink)
        except OSError as e:
            debug_print(f"[RealFS.kind] Cannot stat {entry_path}: {e}", level=2)
            return symlink, None
        if stat.S_ISDIR(st.st_mode):
            return symlink, EntryKind.DIR
        return symlink, EntryKind.FILE

    def watch_data(self) -> WatchData:
        with self._lock:
            return WatchData(dict(self._watch_paths))

    # --- Watch bookkeeping ---
    def _watch_directory(self, path: str, names) -> None:
        expected = None if names is None else sorted(names)

        def check() -> str:
            try:
                current = sorted(os.listdir(path))
            except OSError:
                current = None
            return "" if current == expected else path

        with self._lock:
            self._watch_paths[path] = check

    def _watch_file(self, path: str, data: Optional[bytes]) -> None:
        def check() -> str:
            try:
                with open(path, 'rb') as f:
                    current = f.read()
            except OSError:
                current = None
            return "" if current == data else path

        with self._lock:
            self._watch_paths[path] = check
