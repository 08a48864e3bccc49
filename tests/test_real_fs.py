"""
Unit tests for the host filesystem backend.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import shutil
import tempfile
import time

import pytest
from zipoverlay.core.fs_types import EntryKind, ModKeyUnusableError
from zipoverlay.core.global_config import GlobalConfig
from zipoverlay.core.real_fs import RealFS


@pytest.fixture(scope="function")
def temp_dir():
    d = tempfile.mkdtemp()
    with open(os.path.join(d, "Test.txt"), "w") as f:
        f.write("This is a test file.")
    os.makedirs(os.path.join(d, "subdir"))
    yield d
    shutil.rmtree(d)


def test_read_file(temp_dir):
    result = RealFS().read_file(os.path.join(temp_dir, "Test.txt"))
    assert result == ("This is a test file.", None, None)
    assert result.ok


def test_missing_file_is_not_found(temp_dir):
    result = RealFS().read_file(os.path.join(temp_dir, "missing.txt"))
    assert result.value is None
    assert isinstance(result.canonical_error, FileNotFoundError)
    assert isinstance(result.original_error, FileNotFoundError)


def test_path_through_a_file_is_not_found(temp_dir):
    fs = RealFS()
    through_file = os.path.join(temp_dir, "Test.txt", "inner.txt")
    for result in (fs.read_file(through_file), fs.read_directory(through_file)):
        assert isinstance(result.canonical_error, FileNotFoundError)
        assert isinstance(result.original_error, NotADirectoryError)


def test_read_directory_resolves_kinds_lazily(temp_dir):
    fs = RealFS()
    entries = fs.read_directory(temp_dir).value
    assert entries.names() == ["subdir", "Test.txt"]
    entry, different_case = entries.get("test.txt")
    assert entry.base == "Test.txt"
    assert different_case.query == "test.txt"
    assert entry.kind(fs) == EntryKind.FILE
    assert entries.get("subdir")[0].kind(fs) == EntryKind.DIR
    assert entries.get("nothing") == (None, None)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_kind_follows_symlinks(temp_dir):
    link = os.path.join(temp_dir, "link")
    try:
        os.symlink(os.path.join(temp_dir, "subdir"), link)
    except OSError:
        pytest.skip("cannot create symlinks")
    symlink, kind = RealFS().kind(temp_dir, "link")
    assert kind == EntryKind.DIR
    assert symlink == os.path.realpath(os.path.join(temp_dir, "subdir"))
    assert RealFS().kind(temp_dir, "gone") == ("", None)


def test_cached_directories(temp_dir):
    fs = RealFS(cache_directories=True)
    first = fs.read_directory(temp_dir)
    with open(os.path.join(temp_dir, "new.txt"), "w") as f:
        f.write("new")
    assert fs.read_directory(temp_dir) is first
    assert "new.txt" in RealFS().read_directory(temp_dir).value


def test_mod_key(temp_dir):
    fs = RealFS()
    path = os.path.join(temp_dir, "Test.txt")
    with pytest.raises(ModKeyUnusableError):
        fs.mod_key(path)
    old = time.time_ns() - 10 * 1_000_000_000
    os.utime(path, ns=(old, old))
    key = fs.mod_key(path)
    assert key.mtime_ns == old
    assert key.size == len("This is a test file.")
    with pytest.raises(FileNotFoundError):
        fs.mod_key(os.path.join(temp_dir, "missing.txt"))


def test_open_file(temp_dir):
    result = RealFS().open_file(os.path.join(temp_dir, "Test.txt"))
    assert result.ok
    with result.value as handle:
        assert len(handle) == 20
        assert handle.read(10, 14) == b"test"
    assert isinstance(RealFS().open_file(os.path.join(temp_dir, "nope")).canonical_error, FileNotFoundError)


def test_watch_data(temp_dir):
    fs = RealFS(track_watch_data=True)
    path = os.path.join(temp_dir, "Test.txt")
    missing = os.path.join(temp_dir, "later.txt")
    fs.read_file(path)
    fs.read_file(missing)
    fs.read_directory(temp_dir)
    watch = fs.watch_data()
    assert set(watch.paths) == {path, missing, temp_dir}
    assert watch.changed() == []
    with open(path, "w") as f:
        f.write("changed")
    assert watch.changed() == [path]
    with open(missing, "w") as f:
        f.write("now here")
    assert sorted(watch.changed()) == sorted([path, missing, temp_dir])


def test_path_arithmetic(temp_dir):
    fs = RealFS()
    assert fs.join("a", "b", "c.txt") == os.path.join("a", "b", "c.txt")
    assert fs.join() == ""
    assert fs.dir(os.path.join("a", "b.txt")) == "a"
    assert fs.base(os.path.join("a", "b.txt")) == "b.txt"
    assert fs.ext("archive.zip") == ".zip"
    assert fs.is_abs(temp_dir)
    assert fs.abs("x") == (os.path.join(os.getcwd(), "x"), True)
    assert fs.rel(temp_dir, os.path.join(temp_dir, "subdir")) == ("subdir", True)
    assert fs.cwd() == os.getcwd()
    assert RealFS().watch_data().paths == {}


def test_undecodable_file_is_an_error_value(temp_dir):
    path = os.path.join(temp_dir, "blob.bin")
    with open(path, "wb") as f:
        f.write(b"\xff")
    GlobalConfig.set("text_errors", "strict")
    try:
        result = RealFS().read_file(path)
    finally:
        GlobalConfig.reset()
    assert result.value is None
    assert isinstance(result.canonical_error, UnicodeDecodeError)
    assert result.original_error is result.canonical_error
    assert RealFS().read_file(path).ok
