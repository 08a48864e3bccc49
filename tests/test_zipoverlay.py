"""
API-level tests for the zip overlay.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""

import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import shutil
import tempfile
import unittest
import zipfile

import pytest
from zipoverlay import ArchiveFS, ArchiveCache
from zipoverlay.api.config_api import ConfigAPI


class TestArchiveFS(unittest.TestCase):
    """Test case for the ArchiveFS class."""

    def setUp(self):
        # Allow debug level to be set via environment variable for tests
        debug_level = os.environ.get('ZIPOVERLAY_DEBUG_LEVEL')
        if debug_level is not None:
            ConfigAPI().set('debug_level', int(debug_level))
        self.test_dir = tempfile.mkdtemp()
        self.fs = ArchiveFS()
        self.create_test_files()

    def tearDown(self):
        ConfigAPI().reset()
        self.fs.close()
        shutil.rmtree(self.test_dir)

    def create_test_files(self):
        """Create a plain file and an archive next to it."""
        with open(os.path.join(self.test_dir, "test.txt"), "w") as f:
            f.write("This is a test file.")
        self.archive = os.path.join(self.test_dir, "project.zip")
        with zipfile.ZipFile(self.archive, "w") as zip_file:
            zip_file.writestr("assets/icons/logo.svg", "<svg/>")
            zip_file.writestr("assets/readme.txt", "assets")

    def test_read_plain_and_archived_files(self):
        self.assertEqual(self.fs.files.read(os.path.join(self.test_dir, "test.txt")), "This is a test file.")
        self.assertEqual(self.fs.files.read(os.path.join(self.archive, "assets", "icons", "logo.svg")), "<svg/>")
        self.assertTrue(self.fs.files.exists(os.path.join(self.archive, "ASSETS", "README.TXT")))
        self.assertFalse(self.fs.files.exists(os.path.join(self.archive, "assets", "nope.txt")))

    def test_read_missing_raises(self):
        with self.assertRaises(FileNotFoundError):
            self.fs.files.read(os.path.join(self.archive, "assets", "nope.txt"))
        with self.assertRaises(FileNotFoundError):
            self.fs.files.read(os.path.join(self.test_dir, "plain", "nope.txt"))

    def test_list_dirs(self):
        self.assertEqual(self.fs.dirs.list_dir(self.test_dir), ["project.zip", "test.txt"])
        self.assertEqual(self.fs.dirs.list_dir(self.archive), ["assets"])
        self.assertEqual(self.fs.dirs.list_dir(os.path.join(self.archive, "assets")), ["icons", "readme.txt"])
        self.assertTrue(self.fs.dirs.is_dir(os.path.join(self.archive, "assets", "icons")))
        self.assertFalse(self.fs.dirs.exists(os.path.join(self.archive, "assets", "readme.txt")))
        with self.assertRaises(FileNotFoundError):
            self.fs.dirs.list_dir(os.path.join(self.archive, "missing"))

    def test_entries(self):
        entries = self.fs.dirs.entries(os.path.join(self.archive, "assets"))
        self.assertIs(entries, self.fs.dirs.entries(os.path.join(self.archive, "assets")))
        self.assertEqual(entries.sorted_keys(), ["icons", "readme.txt"])

    def test_shared_cache(self):
        cache = ArchiveCache()
        first = ArchiveFS(cache=cache)
        second = ArchiveFS(cache=cache)
        first.files.read(os.path.join(self.archive, "assets", "readme.txt"))
        self.assertIs(first.cache, second.cache)
        self.assertIn(self.archive, second.cache)
        cache.close()

    def test_read_result(self):
        result = self.fs.files.read_result(os.path.join(self.archive, "assets", "readme.txt"))
        self.assertEqual(result.value, "assets")
        self.assertIsNone(result.canonical_error)


def test_config_access():
    config = ConfigAPI()
    try:
        assert config.text_encoding == "utf-8"
        config.text_errors = "replace"
        assert config["text_errors"] == "replace"
        config["debug_level"] = "2"
        assert config.debug_level == 2
        assert set(config) == {"debug_level", "text_encoding", "text_errors"}
        assert len(config) == 3
        with pytest.raises(AttributeError):
            config.buffer_size = 1
        with pytest.raises(KeyError):
            config["buffer_size"]
        config.reset("text_errors")
        assert config.text_errors == "surrogateescape"
    finally:
        config.reset()


def test_text_errors_setting(tmp_path):
    archive = tmp_path / "bin.zip"
    with zipfile.ZipFile(archive, "w") as zip_file:
        zip_file.writestr("blob.bin", b"ok\xff")
    config = ConfigAPI()
    config.text_errors = "replace"
    try:
        with ArchiveFS() as fs:
            assert fs.files.read(str(archive / "blob.bin")) == "ok�"
    finally:
        config.reset()


def test_debug_output(tmp_path, capsys):
    config = ConfigAPI()
    config.debug_level = 2
    try:
        with ArchiveFS() as fs:
            fs.dirs.exists(str(tmp_path / "missing.zip" / "a"))
        out = capsys.readouterr().out
        assert "[ZIPOVERLAY-DEBUG-1] [ArchiveIndex.load] Cannot open archive" in out
        assert "[ZIPOVERLAY-DEBUG-2]" in out
    finally:
        config.reset()
