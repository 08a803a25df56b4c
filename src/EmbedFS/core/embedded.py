"""Filesystem backend serving assets from the in-memory table."""

import logging

from .files import EmbeddedFile
from .paths import clean_path
from .records import AssetRecord
from .table import AssetTable

logger = logging.getLogger("embedfs.embedded")


class EmbeddedFileSystem:
    """Serve assets from an :class:`AssetTable` with on-demand decompression.

    Each record is decompressed at most once, on first access, no matter
    how many threads race to open it. Lookups require exact paths; there
    is no directory enumeration.
    """

    def __init__(self, table: AssetTable):
        self.table = table

    def prepare(self, path: str) -> AssetRecord:
        """Look up ``path`` and make sure its payload is decompressed.

        Raises AssetNotFoundError when the path is absent and
        CorruptAssetError when the payload is unusable.
        """
        name = clean_path(path)
        record = self.table.lookup(name)
        record.ensure_loaded(name)
        return record

    def open(self, path: str) -> EmbeddedFile:
        """Open ``path`` as a seekable, read-only handle."""
        return EmbeddedFile(self.prepare(path))

    def read_bytes(self, path: str) -> bytes:
        """Return the decompressed bytes of ``path`` without a handle."""
        return self.prepare(path).data

    def __repr__(self) -> str:
        return f"EmbeddedFileSystem(entries={len(self.table)})"
