"""Tests for path canonicalization helpers."""

import os

import pytest

from EmbedFS.core.paths import base_name, clean_path, local_join


@pytest.mark.parametrize("raw, expected", [
    ("/static/a.txt", "/static/a.txt"),
    ("/static//a.txt", "/static/a.txt"),
    ("/static/./a.txt", "/static/a.txt"),
    ("/static/css/../a.txt", "/static/a.txt"),
    ("/static/", "/static"),
    ("/../static/a.txt", "/static/a.txt"),
    ("/", "/"),
    ("", "."),
    ("static/a.txt", "static/a.txt"),
    ("a/../..", ".."),
    ("./", "."),
    ("\\static\\a.txt", "/static/a.txt"),
])
def test_clean_path(raw, expected):
    assert clean_path(raw) == expected


def test_base_name():
    assert base_name("/static/css/site.css") == "site.css"
    assert base_name("/static/") == "static"
    assert base_name("/") == "/"


def test_local_join_stays_under_root():
    assert local_join("root", "/static/a.txt") == os.path.join("root", "static", "a.txt")
    assert local_join("root", "/../../etc/passwd") == os.path.join("root", "etc", "passwd")
    assert local_join("root", "/") == "root"
