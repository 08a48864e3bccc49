"""
Filesystem abstraction for the zip overlay.
Defines the value types exchanged by filesystems and the interface every
filesystem (host or overlay) implements.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import enum
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple


class EntryKind(enum.Enum):
    """Kind of a directory entry."""
    DIR = 1
    FILE = 2


class ReadResult(NamedTuple):
    """
    Outcome of a read operation.

    The canonical error classifies the failure (a FileNotFoundError means
    "does not exist"); the original error is what the underlying layer raised.
    Both are None on success.
    """
    value: Any
    canonical_error: Optional[BaseException]
    original_error: Optional[BaseException]

    @property
    def ok(self) -> bool:
        return self.canonical_error is None


class ModKey(NamedTuple):
    """Stat fields that change whenever a file changes."""
    inode: int
    size: int
    mtime_ns: int
    mode: int
    uid: int


class ModKeyUnusableError(Exception):
    """The file changed too recently for its modification key to be trusted."""
    pass


class DifferentCase(NamedTuple):
    """Reported when a lookup only matched after case folding."""
    dir: str
    query: str
    actual: str


class Entry:
    """
    A single directory entry.

    Archive entries know their kind up front. Host entries may not, in which
    case the kind is resolved through the owning filesystem on first use.
    """

    def __init__(self, dir: str, base: str, kind: Optional[EntryKind] = None):
        self.dir = dir
        self.base = base
        self._kind = kind
        self._symlink = ""
        self._need_stat = kind is None
        self._lock = threading.Lock()

    def kind(self, fs: "BaseFS") -> Optional[EntryKind]:
        with self._lock:
            self._resolve(fs)
            return self._kind

    def symlink(self, fs: "BaseFS") -> str:
        with self._lock:
            self._resolve(fs)
            return self._symlink

    def _resolve(self, fs):
        if self._need_stat:
            self._need_stat = False
            self._symlink, self._kind = fs.kind(self.dir, self.base)

    def __repr__(self):
        kind = self._kind.name if self._kind is not None else "?"
        return f"Entry(dir={self.dir!r}, base={self.base!r}, kind={kind})"


class DirEntries:
    """
    Listing of one directory, keyed by lower-cased child name.
    Built once and never mutated afterwards, so it can be shared freely.
    """

    def __init__(self, dir: str, data: Dict[str, Entry]):
        self.dir = dir
        self._data = data

    def get(self, query: str) -> Tuple[Optional[Entry], Optional[DifferentCase]]:
        """
        Look up a child by name, ignoring case.

        Returns:
            (entry, different_case) where different_case is set when the
            stored name differs from the query only in case
        """
        entry = self._data.get(query.lower())
        if entry is None:
            return None, None
        if entry.base != query:
            return entry, DifferentCase(dir=self.dir, query=query, actual=entry.base)
        return entry, None

    def sorted_keys(self) -> List[str]:
        return sorted(self._data)

    def names(self) -> List[str]:
        """Original-case child names, sorted case-insensitively."""
        return [self._data[key].base for key in self.sorted_keys()]

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._data

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self):
        return f"DirEntries(dir={self.dir!r}, names={self.names()!r})"


class WatchData:
    """
    Paths a filesystem has read, each mapped to a callable that returns ""
    while the path is unchanged and the path itself once it has changed.
    """

    def __init__(self, paths: Optional[Dict[str, Callable[[], str]]] = None):
        self.paths = paths if paths is not None else {}

    def changed(self) -> List[str]:
        return [path for path in (check() for check in self.paths.values()) if path]


class OpenedFile(ABC):
    """Streaming read handle returned by open_file."""

    @abstractmethod
    def __len__(self) -> int:
        pass

    @abstractmethod
    def read(self, start: int, end: int) -> bytes:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class BaseFS(ABC):
    """
    Interface shared by the host filesystem and the zip overlay.
    Read operations report failures as ReadResult values instead of raising.
    """

    @abstractmethod
    def read_directory(self, path: str) -> ReadResult:
        """
        List a directory.

        Args:
            path: Directory path

        Returns:
            ReadResult whose value is a DirEntries on success
        """
        pass

    @abstractmethod
    def read_file(self, path: str) -> ReadResult:
        """
        Read a whole file as text.

        Args:
            path: File path

        Returns:
            ReadResult whose value is the decoded contents on success
        """
        pass

    @abstractmethod
    def open_file(self, path: str) -> ReadResult:
        """Open a streaming handle; the value is an OpenedFile."""
        pass

    @abstractmethod
    def mod_key(self, path: str) -> ModKey:
        """
        Compute a key that changes whenever the file changes.

        Raises:
            OSError: If the file cannot be stat'ed
            ModKeyUnusableError: If the file was modified too recently
        """
        pass

    @abstractmethod
    def is_abs(self, path: str) -> bool:
        pass

    @abstractmethod
    def abs(self, path: str) -> Tuple[str, bool]:
        pass

    @abstractmethod
    def dir(self, path: str) -> str:
        pass

    @abstractmethod
    def base(self, path: str) -> str:
        pass

    @abstractmethod
    def ext(self, path: str) -> str:
        pass

    @abstractmethod
    def join(self, *parts: str) -> str:
        pass

    @abstractmethod
    def cwd(self) -> str:
        pass

    @abstractmethod
    def rel(self, base: str, target: str) -> Tuple[str, bool]:
        pass

    @abstractmethod
    def kind(self, dir: str, base: str) -> Tuple[str, Optional[EntryKind]]:
        """
        Classify the entry base inside dir.

        Returns:
            (symlink, kind) where symlink is the resolved target when the
            entry is a symbolic link and "" otherwise; kind is None when
            the entry cannot be stat'ed
        """
        pass

    @abstractmethod
    def watch_data(self) -> WatchData:
        pass
