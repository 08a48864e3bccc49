"""
In-memory index of a single zip archive.
Directory listings and file contents are materialized lazily, once per
entry, and cached for the lifetime of the process.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import threading
import zipfile
from typing import Dict, Optional

from .fs_types import DirEntries, Entry, EntryKind, ReadResult
from .global_config import GlobalConfig
from .logging import debug_print


def _split_name(name: str):
    """Split 'a/b/c' into ('a/b', 'c'); top-level names have an empty parent."""
    slash = name.rfind('/')
    if slash == -1:
        return "", name
    return name[:slash], name[slash + 1:]


class DirectoryRecord:
    """A directory inside an archive, explicit or implied by a deeper entry."""

    def __init__(self, path: str):
        self.path = path
        # original-case base name -> kind
        self.entries: Dict[str, EntryKind] = {}
        self._lock = threading.Lock()
        self._listing: Optional[DirEntries] = None

    def materialize(self, request_path: str) -> DirEntries:
        """
        Build the listing on first use and return the cached one afterwards.

        Args:
            request_path: The directory path as the caller asked for it; it
                becomes the parent path of every entry

        Returns:
            The shared, immutable listing
        """
        with self._lock:
            if self._listing is not None:
                return self._listing
            data = {}
            for name, kind in self.entries.items():
                data[name.lower()] = Entry(dir=request_path, base=name, kind=kind)
            self._listing = DirEntries(request_path, data)
            debug_print(f"[DirectoryRecord.materialize] {request_path}: {len(data)} entries", level=2)
            return self._listing

    @property
    def materialized(self) -> bool:
        return self._listing is not None


class FileRecord:
    """A file inside an archive. Its contents are decompressed at most once."""

    def __init__(self, archive: zipfile.ZipFile, info: zipfile.ZipInfo):
        self.archive = archive
        self.info = info
        self.was_read = False
        self.contents: Optional[str] = None
        self.error: Optional[BaseException] = None
        self._lock = threading.Lock()

    def read(self) -> ReadResult:
        """
        Decompress the entry and decode it as text.
        The first outcome, success or failure, is replayed on every later call.
        """
        with self._lock:
            if self.was_read:
                return ReadResult(self.contents, self.error, self.error)
            self.was_read = True

            try:
                stream = self.archive.open(self.info)
            except Exception as e:
                debug_print(f"[FileRecord.read] Cannot open {self.info.filename}: {e}", level=1, exc=e)
                self.error = e
                return ReadResult(None, e, e)

            try:
                with stream:
                    data = stream.read()
            except Exception as e:
                debug_print(f"[FileRecord.read] Cannot read {self.info.filename}: {e}", level=1, exc=e)
                self.error = e
                return ReadResult(None, e, e)

            encoding, errors = GlobalConfig.get_text_encoding()
            try:
                self.contents = data.decode(encoding, errors)
            except (UnicodeDecodeError, LookupError) as e:
                debug_print(f"[FileRecord.read] Cannot decode {self.info.filename}: {e}", level=1, exc=e)
                self.error = e
                return ReadResult(None, e, e)
            debug_print(f"[FileRecord.read] Read {self.info.filename} ({len(data)} bytes)", level=2)
            return ReadResult(self.contents, None, None)


class ArchiveIndex:
    """
    Index of one archive path.

    Created as an empty placeholder by the cache and filled by load() outside
    the cache lock. Waiters block on wait() until load() has finished.
    A load error is permanent: the index then behaves as if the archive
    did not exist.
    """

    def __init__(self, path: str):
        self.path = path
        self.directories: Dict[str, DirectoryRecord] = {}
        self.files: Dict[str, FileRecord] = {}
        self.load_error: Optional[BaseException] = None
        self.reader: Optional[zipfile.ZipFile] = None
        self._loaded = threading.Event()

    @property
    def usable(self) -> bool:
        return self._loaded.is_set() and self.load_error is None

    def wait(self) -> None:
        self._loaded.wait()

    def load(self, opener=zipfile.ZipFile) -> None:
        """
        Open the archive and index every entry. Always signals completion,
        whether or not the archive could be read.

        Args:
            opener: Callable taking the archive path and returning a ZipFile
        """
        try:
            try:
                reader = opener(self.path)
            except Exception as e:
                debug_print(f"[ArchiveIndex.load] Cannot open archive {self.path}: {e}", level=1, exc=e)
                self.load_error = e
                return
            try:
                self._index(reader)
            except Exception as e:
                debug_print(f"[ArchiveIndex.load] Cannot index archive {self.path}: {e}", level=1, exc=e)
                self.load_error = e
                self.directories, self.files = {}, {}
                reader.close()
                return
            self.reader = reader
            debug_print(
                f"[ArchiveIndex.load] Indexed {self.path}: "
                f"{len(self.files)} files, {len(self.directories)} directories", level=2)
        finally:
            self._loaded.set()

    def _ensure_dir(self, dir_path: str) -> DirectoryRecord:
        key = dir_path.lower()
        record = self.directories.get(key)
        if record is None:
            record = DirectoryRecord(dir_path)
            self.directories[key] = record
        return record

    def _index(self, reader: zipfile.ZipFile) -> None:
        self._ensure_dir("")
        for info in reader.infolist():
            name = info.filename
            if name.endswith('/'):
                name = name[:-1]
            dir_path, base_name = _split_name(name)

            if info.is_dir():
                # The parent gets its entry when ancestors are filled in below
                self._ensure_dir(name)
                debug_print(f"[ArchiveIndex._index] dir  {name}", level=3)
            else:
                self.files[info.filename.lower()] = FileRecord(reader, info)
                self._ensure_dir(dir_path).entries[base_name] = EntryKind.FILE
                debug_print(f"[ArchiveIndex._index] file {info.filename}", level=3)

        # Every directory is listed in its parent, all the way up to the root
        for seed in list(self.directories.values()):
            path = seed.path
            while path:
                parent_path, base_name = _split_name(path)
                self._ensure_dir(parent_path).entries[base_name] = EntryKind.DIR
                path = parent_path

    def list_directory(self, entry_path: str, request_path: str) -> Optional[DirEntries]:
        """Listing for a directory inside the archive, or None if it has no such directory."""
        record = self.directories.get(entry_path.lower())
        if record is None:
            return None
        return record.materialize(request_path)

    def read_file(self, entry_path: str) -> Optional[ReadResult]:
        """Contents of a file inside the archive, or None if it has no such file."""
        record = self.files.get(entry_path.lower())
        if record is None:
            return None
        return record.read()

    def close(self) -> None:
        """Close the archive handle. The index then behaves as if the archive did not exist."""
        if self.reader is not None:
            if self.load_error is None:
                self.load_error = ValueError(f"Archive {self.path} was closed")
            self.reader.close()
