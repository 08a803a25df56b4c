"""Single entry point selecting the embedded or the local backend."""

import logging
import os
import threading
from typing import Optional

from .config import EmbedFSConfig
from .core import (
    AssetTable,
    EmbeddedFileSystem,
    LocalFileSystem,
    SubPathFileSystem,
    load_manifest,
    setup_logging,
)

logger = logging.getLogger("embedfs")


def _terminate(exc: BaseException):
    """End the process with status 1.

    SystemExit only unwinds the calling thread, so off the main thread the
    process is ended directly once log handlers are flushed.
    """
    if threading.current_thread() is threading.main_thread():
        raise SystemExit(1) from exc
    logging.shutdown()
    os._exit(1)


class StaticAssets:
    """Serve one asset table either embedded or from disk.

    ``use_local`` picks the backend on every call, so the same calling
    code works in development (live files) and production (embedded
    table). Passing ``use_local=None`` falls back to ``config.use_local``.
    """

    def __init__(self, table: AssetTable, config: Optional[EmbedFSConfig] = None):
        self.table = table
        self.config = config or EmbedFSConfig()
        self.embedded = EmbeddedFileSystem(table)
        self.local = LocalFileSystem(
            self.config.local_root,
            table if self.config.restrict_local_to_table else None,
        )

    @classmethod
    def from_manifest(cls, path: str, config: Optional[EmbedFSConfig] = None) -> "StaticAssets":
        """Load the table from a CSV manifest."""
        return cls(load_manifest(path), config)

    @classmethod
    def from_config(cls, config: EmbedFSConfig, configure_logging: bool = False) -> "StaticAssets":
        """Load the table from ``config.manifest_path``.

        With ``configure_logging`` the ``log_level`` and ``log_file``
        settings are applied through :func:`setup_logging` first.
        """
        if configure_logging:
            setup_logging(config.log_level, config.log_file or None)
        return cls.from_manifest(config.manifest_path, config)

    def _use_local(self, use_local: Optional[bool]) -> bool:
        if use_local is None:
            return self.config.use_local
        return bool(use_local)

    def get_filesystem(self, use_local: Optional[bool] = None):
        """Return the local backend if ``use_local`` else the embedded one."""
        if self._use_local(use_local):
            return self.local
        return self.embedded

    def get_directory(self, use_local: Optional[bool], prefix: str) -> SubPathFileSystem:
        """Return the selected backend mounted at ``prefix``."""
        return SubPathFileSystem(self.get_filesystem(use_local), prefix)

    def read_bytes(self, use_local: Optional[bool], path: str) -> bytes:
        """Return the full contents of ``path``; backend errors propagate."""
        if self._use_local(use_local):
            with self.local.open(path) as f:
                return f.read()
        return self.embedded.read_bytes(path)

    def read_bytes_or_fatal(self, use_local: Optional[bool], path: str) -> bytes:
        """Like :meth:`read_bytes`, but any failure terminates the process.

        For assets the caller asserts must always exist.
        """
        try:
            return self.read_bytes(use_local, path)
        except Exception as exc:
            logger.critical("Required asset %s could not be read: %s", path, exc)
            _terminate(exc)

    def read_string(self, use_local: Optional[bool], path: str) -> str:
        return self._decode(self.read_bytes(use_local, path))

    def read_string_or_fatal(self, use_local: Optional[bool], path: str) -> str:
        return self._decode(self.read_bytes_or_fatal(use_local, path))

    def _decode(self, data: bytes) -> str:
        return data.decode(self.config.encoding, errors="replace")
