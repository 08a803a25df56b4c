"""Read-only registry mapping canonical paths to asset records."""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping

from .errors import AssetNotFoundError
from .paths import clean_path
from .records import AssetRecord

logger = logging.getLogger("embedfs.table")


class AssetTable:
    """Immutable asset table shared by every backend.

    Keys are canonicalized once at construction. Records are never added
    or removed afterwards; only their lazily decompressed fields change.
    """

    def __init__(self, records: Mapping[str, AssetRecord]):
        """Store a canonicalized, read-only view of ``records``."""
        canonical: Dict[str, AssetRecord] = {}
        for path, record in records.items():
            key = clean_path(path)
            if key in canonical and canonical[key] is not record:
                raise ValueError(f"Duplicate asset path after normalization: {path}")
            canonical[key] = record
        self._records = MappingProxyType(canonical)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> "AssetTable":
        """Build a table from the literal produced by the embedding step.

        Each value carries ``compressed``, ``size``, ``modtime``, ``local``
        and ``isDir``; only ``size`` and (for non-empty assets)
        ``compressed`` are required.
        """
        records = {}
        for path, entry in data.items():
            if "size" not in entry:
                raise ValueError(f"Asset entry '{path}' is missing 'size'")
            try:
                records[path] = AssetRecord(
                    compressed=str(entry.get("compressed", "") or ""),
                    size=int(entry["size"]),
                    modtime=int(entry.get("modtime", 0)),
                    local=str(entry.get("local", "") or ""),
                    is_dir=bool(entry.get("isDir", False)),
                )
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid asset entry '{path}': {e}") from e
        logger.debug("Built asset table with %d entries", len(records))
        return cls(records)

    def lookup(self, path: str) -> AssetRecord:
        """Return the record for ``path``; raise AssetNotFoundError if absent."""
        key = clean_path(path)
        record = self._records.get(key)
        if record is None:
            raise AssetNotFoundError(key)
        return record

    def records(self) -> Mapping[str, AssetRecord]:
        """Return the read-only path -> record mapping."""
        return self._records

    def paths(self) -> List[str]:
        return sorted(self._records)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and clean_path(path) in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths())
