"""Tests for mounting a backend under a path prefix."""

import os

import pytest

from EmbedFS.core import (
    AssetNotFoundError,
    EmbeddedFileSystem,
    FileSystem,
    LocalFileSystem,
    SubPathFileSystem,
)


def test_embedded_mount_equivalent_to_full_path(sample_table):
    fs = EmbeddedFileSystem(sample_table)
    mounted = SubPathFileSystem(fs, "/static")
    assert isinstance(mounted, FileSystem)
    assert mounted.open("/a.txt").read() == fs.open("/static/a.txt").read()
    assert mounted.open("/css/site.css").stat() == fs.open("/static/css/site.css").stat()
    assert mounted.read_bytes("/a.txt") == b"hello world"


def test_mount_missing_path_not_found(sample_table):
    mounted = SubPathFileSystem(EmbeddedFileSystem(sample_table), "/static")
    with pytest.raises(AssetNotFoundError):
        mounted.open("/missing.txt")


def test_prefix_is_concatenated_verbatim(sample_table):
    mounted = SubPathFileSystem(EmbeddedFileSystem(sample_table), "/static")
    # "a.txt" without a leading slash becomes "/statica.txt".
    with pytest.raises(AssetNotFoundError):
        mounted.open("a.txt")


def test_nested_mounts(sample_table):
    outer = SubPathFileSystem(EmbeddedFileSystem(sample_table), "/static")
    inner = SubPathFileSystem(outer, "/css")
    assert inner.read_bytes("/site.css") == b"body { margin: 0; }\n"


def test_local_mount(tmp_dir):
    os.makedirs(os.path.join(tmp_dir, "assets"))
    with open(os.path.join(tmp_dir, "assets", "img.png"), "wb") as f:
        f.write(b"\x89PNG")
    local = LocalFileSystem(tmp_dir)
    mounted = SubPathFileSystem(local, "/assets")
    with mounted.open("/img.png") as a, local.open("/assets/img.png") as b:
        assert a.read() == b.read() == b"\x89PNG"
    assert mounted.read_bytes("/img.png") == b"\x89PNG"


def test_mount_falls_back_to_open_without_read_bytes(sample_table):
    class OpenOnly:
        def __init__(self, inner):
            self.inner = inner

        def open(self, path):
            return self.inner.open(path)

    mounted = SubPathFileSystem(OpenOnly(EmbeddedFileSystem(sample_table)), "/static")
    assert mounted.read_bytes("/a.txt") == b"hello world"
