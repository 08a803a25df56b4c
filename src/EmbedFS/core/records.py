"""Asset record dataclass and its one-shot decompression guard."""

import base64
import binascii
import gzip
import logging
import threading
import zlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .errors import CorruptAssetError
from .paths import base_name

logger = logging.getLogger("embedfs.records")

_UNSET = "unset"
_READY = "ready"
_FAILED = "failed"


def decode_payload(compressed: str) -> bytes:
    """Decode base64 text and gunzip it.

    Line breaks inside the text are ignored; any other non-alphabet
    character is an error. Raises ``binascii.Error``, ``OSError``,
    ``EOFError`` or ``zlib.error`` on malformed input.
    """
    text = "".join(compressed.split())
    raw = base64.b64decode(text, validate=True)
    return gzip.decompress(raw)


@dataclass(eq=False)
class AssetRecord:
    """Single entry in the asset table.

    ``data`` and ``name`` start unset and are filled exactly once by
    :meth:`ensure_loaded`. A failed load is remembered and re-raised.
    """

    compressed: str = ""
    size: int = 0
    modtime: int = 0
    local: str = ""
    is_dir: bool = False

    data: bytes = field(default=b"", init=False, repr=False)
    name: str = field(default="", init=False)
    _state: str = field(default=_UNSET, init=False, repr=False)
    _error: Optional[CorruptAssetError] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the static fields of the record."""
        if self.size < 0:
            raise ValueError(f"AssetRecord.size must be >= 0, got {self.size}")
        if self.size > 0 and not self.compressed:
            raise ValueError("AssetRecord.compressed is required when size > 0")

    @property
    def loaded(self) -> bool:
        """True once the one-shot initializer has completed (or failed)."""
        return self._state != _UNSET

    @property
    def mod_time(self) -> datetime:
        """Modification time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.modtime, tz=timezone.utc)

    def ensure_loaded(self, path: str) -> bytes:
        """Populate ``name`` and ``data`` once; return the decompressed bytes.

        Concurrent first callers block on the record lock until the single
        decompression finishes. Raises :class:`CorruptAssetError` (the same
        instance every time) if the payload is unusable.
        """
        if self._state == _UNSET:
            with self._lock:
                if self._state == _UNSET:
                    self._load(path)
        if self._state == _FAILED:
            raise self._error
        return self.data

    def _load(self, path: str) -> None:
        """Run the one-shot initializer (called under ``_lock``)."""
        self.name = base_name(path)
        if self.size == 0:
            self._state = _READY
            return
        try:
            data = decode_payload(self.compressed)
        except (binascii.Error, ValueError) as exc:
            self._fail(path, f"invalid transport encoding ({exc})", exc)
            return
        except (OSError, EOFError, zlib.error) as exc:
            self._fail(path, f"invalid compressed stream ({exc})", exc)
            return
        if len(data) != self.size:
            self._fail(
                path,
                f"decompressed {len(data)} bytes, expected {self.size}",
                None,
            )
            return
        self.data = data
        self._state = _READY
        logger.debug("Decompressed %s (%d bytes)", path, self.size)

    def _fail(self, path: str, reason: str, cause: Optional[BaseException]) -> None:
        error = CorruptAssetError(path, reason)
        error.__cause__ = cause
        self._error = error
        self._state = _FAILED
        logger.warning("Embedded asset %s is unusable: %s", path, reason)
