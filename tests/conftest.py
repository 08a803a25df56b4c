"""Shared test fixtures."""

import shutil
import tempfile

import pytest

from EmbedFS.core import AssetTable, encode_payload


HELLO = b"hello world"


def _entry(data: bytes, modtime: int = 1519111881, local: str = "", is_dir: bool = False):
    """Build one construction-contract entry for ``data``."""
    return {
        "compressed": encode_payload(data) if data else "",
        "size": len(data),
        "modtime": modtime,
        "local": local,
        "isDir": is_dir,
    }


@pytest.fixture
def make_entry():
    return _entry


@pytest.fixture
def sample_mapping():
    return {
        "/static": _entry(b"", is_dir=True),
        "/static/a.txt": _entry(HELLO),
        "/static/empty.txt": _entry(b""),
        "/static/css/site.css": _entry(b"body { margin: 0; }\n"),
    }


@pytest.fixture
def sample_table(sample_mapping):
    return AssetTable.from_mapping(sample_mapping)


@pytest.fixture
def tmp_dir():
    d = tempfile.mkdtemp()
    yield d
    shutil.rmtree(d, ignore_errors=True)
