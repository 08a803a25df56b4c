"""Filesystem backend reading live files from disk (development mode)."""

import logging
import os
from typing import Optional

from .errors import AssetNotFoundError
from .files import LocalFile
from .paths import base_name, clean_path, local_join
from .table import AssetTable

logger = logging.getLogger("embedfs.local")


class LocalFileSystem:
    """Open files under ``root`` on every call, with no caching.

    When ``table`` is given, only paths present in the table are reachable
    and each one is read from the record's ``local`` location (relative
    locations are resolved against ``root``).
    """

    def __init__(self, root: str = ".", table: Optional[AssetTable] = None):
        self.root = str(root)
        self.table = table

    def resolve(self, path: str) -> str:
        """Return the on-disk location backing ``path``.

        Paths must be rooted, as embedded lookups require.
        """
        name = clean_path(path)
        if not name.startswith("/"):
            raise AssetNotFoundError(name)
        if self.table is not None:
            record = self.table.lookup(name)
            if record.local:
                if os.path.isabs(record.local):
                    return record.local
                return os.path.join(self.root, record.local)
        return local_join(self.root, name)

    def open(self, path: str) -> LocalFile:
        """Open ``path``; OSError subclasses propagate unchanged."""
        location = self.resolve(path)
        logger.debug("Opening local file %s for %s", location, path)
        return LocalFile(location, base_name(path))

    def read_bytes(self, path: str) -> bytes:
        with self.open(path) as f:
            return f.read()

    def __repr__(self) -> str:
        restricted = self.table is not None
        return f"LocalFileSystem(root={self.root!r}, restricted={restricted})"
