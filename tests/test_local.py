"""Tests for the local-disk filesystem backend."""

import os
import shutil
import tempfile
import unittest

from EmbedFS.core import (
    AssetNotFoundError,
    AssetTable,
    EmbeddedFileSystem,
    FileSystem,
    LocalFile,
    LocalFileSystem,
    encode_payload,
)


class TestLocalFileSystem(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        os.makedirs(os.path.join(self.tmpdir, "static", "css"))
        self.a_txt = os.path.join(self.tmpdir, "static", "a.txt")
        with open(self.a_txt, "wb") as f:
            f.write(b"hello world")
        with open(os.path.join(self.tmpdir, "static", "css", "site.css"), "wb") as f:
            f.write(b"body {}")
        self.fs = LocalFileSystem(self.tmpdir)

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_satisfies_protocol(self):
        self.assertIsInstance(self.fs, FileSystem)

    def test_open_reads_file(self):
        with self.fs.open("/static/a.txt") as f:
            self.assertIsInstance(f, LocalFile)
            self.assertEqual(f.read(), b"hello world")
            info = f.stat()
        self.assertEqual(info.name, "a.txt")
        self.assertEqual(info.size, 11)
        self.assertFalse(info.is_dir)

    def test_seek_and_tell(self):
        with self.fs.open("/static/a.txt") as f:
            f.seek(6)
            self.assertEqual(f.tell(), 6)
            self.assertEqual(f.read(), b"world")

    def test_path_is_normalized(self):
        with self.fs.open("/static/css/../a.txt") as f:
            self.assertEqual(f.read(), b"hello world")

    def test_relative_path_is_not_found_like_embedded(self):
        table = AssetTable.from_mapping({
            "/static/a.txt": {"compressed": encode_payload(b"hello world"), "size": 11},
        })
        for fs in (self.fs, EmbeddedFileSystem(table)):
            with self.assertRaises(AssetNotFoundError):
                fs.open("static/a.txt")

    def test_missing_file_raises_os_error(self):
        with self.assertRaises(FileNotFoundError):
            self.fs.open("/static/missing.txt")

    def test_reflects_live_disk_state(self):
        with self.fs.open("/static/a.txt") as f:
            self.assertEqual(f.read(), b"hello world")
        with open(self.a_txt, "wb") as f:
            f.write(b"changed")
        with self.fs.open("/static/a.txt") as f:
            self.assertEqual(f.read(), b"changed")

    def test_directory_handle_lists_entries(self):
        with self.fs.open("/static") as d:
            self.assertTrue(d.is_dir)
            self.assertEqual(d.read(), b"")
            names = [info.name for info in d.readdir()]
            self.assertEqual(names, ["a.txt", "css"])
            self.assertEqual(len(d.readdir(1)), 1)
            self.assertTrue(d.stat().is_dir)

    def test_file_readdir_is_empty(self):
        with self.fs.open("/static/a.txt") as f:
            self.assertEqual(f.readdir(), [])

    def test_closed_handle_rejects_reads(self):
        f = self.fs.open("/static/a.txt")
        f.close()
        with self.assertRaises(ValueError):
            f.read()

    def test_matches_embedded_content(self):
        with open(self.a_txt, "rb") as f:
            data = f.read()
        table = AssetTable.from_mapping({
            "/static/a.txt": {"compressed": encode_payload(data), "size": len(data)},
        })
        embedded = EmbeddedFileSystem(table)
        with self.fs.open("/static/a.txt") as local_f:
            self.assertEqual(local_f.read(), embedded.open("/static/a.txt").read())


class TestTableRestrictedLocalFileSystem(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        os.makedirs(os.path.join(self.tmpdir, "src"))
        with open(os.path.join(self.tmpdir, "src", "index.html"), "wb") as f:
            f.write(b"<html></html>")
        with open(os.path.join(self.tmpdir, "secret.txt"), "wb") as f:
            f.write(b"nope")
        self.table = AssetTable.from_mapping({
            "/static/index.html": {
                "compressed": encode_payload(b"<html></html>"),
                "size": 13,
                "local": os.path.join("src", "index.html"),
            },
            "/secret.txt": {"compressed": encode_payload(b"nope"), "size": 4},
        })
        self.fs = LocalFileSystem(self.tmpdir, self.table)

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_reads_record_local_path(self):
        with self.fs.open("/static/index.html") as f:
            self.assertEqual(f.read(), b"<html></html>")
            self.assertEqual(f.name, "index.html")

    def test_absolute_local_path_is_used_as_is(self):
        table = AssetTable.from_mapping({
            "/x.html": {
                "compressed": encode_payload(b"<html></html>"),
                "size": 13,
                "local": os.path.join(self.tmpdir, "src", "index.html"),
            },
        })
        fs = LocalFileSystem("/nonexistent-root", table)
        self.assertEqual(fs.read_bytes("/x.html"), b"<html></html>")

    def test_empty_local_falls_back_to_root_join(self):
        self.assertEqual(self.fs.read_bytes("/secret.txt"), b"nope")

    def test_unknown_path_is_not_found_even_if_on_disk(self):
        with self.assertRaises(AssetNotFoundError):
            self.fs.open("/src/index.html")


if __name__ == "__main__":
    unittest.main(verbosity=2)
