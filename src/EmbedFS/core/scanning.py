"""Asset table building, payload encoding, and manifest I/O."""

import base64
import csv
import gzip
import logging
import os
import threading
import uuid
from fnmatch import fnmatch
from typing import Dict, List, Tuple

from tqdm import tqdm

from ..config import EmbedFSConfig
from .paths import clean_path
from .records import AssetRecord
from .table import AssetTable

logger = logging.getLogger("embedfs.scanning")

_LINE_WIDTH = 76
MANIFEST_FIELDS = ["path", "compressed", "size", "modtime", "local", "is_dir"]


def encode_payload(data: bytes, level: int = 9) -> str:
    """Gzip ``data`` and wrap the base64 text at 76 columns."""
    # mtime=0 keeps the output deterministic for identical input.
    raw = gzip.compress(data, compresslevel=level, mtime=0)
    text = base64.b64encode(raw).decode("ascii")
    lines = [text[i:i + _LINE_WIDTH] for i in range(0, len(text), _LINE_WIDTH)]
    return "\n".join(lines)


def _is_ignored(name: str, patterns: List[str]) -> bool:
    return any(fnmatch(name, pattern) for pattern in patterns)


def _asset_key(prefix: str, rel_path: str) -> str:
    rel = rel_path.replace(os.sep, "/")
    if rel == ".":
        return clean_path(prefix or "/")
    return clean_path(f"{prefix}/{rel}")


def _collect(source_dir: str, config: EmbedFSConfig) -> Tuple[List[str], List[str]]:
    """Return (directories, files) under ``source_dir``, relative paths."""
    patterns = config.scan.ignore_patterns
    root_real = os.path.realpath(source_dir)
    dirs: List[str] = []
    files: List[str] = []

    for root, dirnames, filenames in os.walk(source_dir):
        dirnames[:] = sorted(d for d in dirnames if not _is_ignored(d, patterns))
        dirs.append(os.path.relpath(root, source_dir))
        for fname in sorted(filenames):
            if _is_ignored(fname, patterns):
                continue
            fpath = os.path.join(root, fname)
            real_fpath = os.path.realpath(fpath)
            # Guard against symlink/path escapes outside source_dir.
            try:
                if os.path.commonpath([root_real, real_fpath]) != root_real:
                    logger.warning(
                        "Skipping file outside source root via symlink: %s", fpath
                    )
                    continue
            except ValueError:
                logger.warning("Skipping file with incompatible path root: %s", fpath)
                continue
            files.append(os.path.relpath(fpath, source_dir))
    return dirs, files


def scan_assets(source_dir: str, config: EmbedFSConfig = None) -> AssetTable:
    """Walk ``source_dir`` and build an asset table from its contents.

    Keys are ``config.scan.prefix`` joined with each relative path.
    Directories become size-0 markers when ``include_directories`` is set.
    """
    config = config or EmbedFSConfig()
    if not os.path.isdir(source_dir):
        raise NotADirectoryError(f"Not a directory: {source_dir}")

    prefix = config.scan.prefix
    level = config.scan.compression_level
    dirs, files = _collect(source_dir, config)
    records: Dict[str, AssetRecord] = {}

    if config.scan.include_directories:
        for rel in dirs:
            dpath = os.path.normpath(os.path.join(source_dir, rel))
            records[_asset_key(prefix, rel)] = AssetRecord(
                size=0,
                modtime=int(os.path.getmtime(dpath)),
                local=dpath,
                is_dir=True,
            )

    progress = tqdm(
        files, desc="Embedding assets", unit="file",
        disable=not config.scan.show_progress,
    )
    for rel in progress:
        fpath = os.path.join(source_dir, rel)
        with open(fpath, "rb") as f:
            data = f.read()
        records[_asset_key(prefix, rel)] = AssetRecord(
            compressed=encode_payload(data, level) if data else "",
            size=len(data),
            modtime=int(os.path.getmtime(fpath)),
            local=fpath,
        )

    logger.info(
        "Scanned %d files and %d directories from %s",
        len(files), len(dirs) if config.scan.include_directories else 0, source_dir,
    )
    return AssetTable(records)


def save_manifest(table: AssetTable, path: str):
    """Write the asset table to a CSV manifest file."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    tmp_path = f"{path}.tmp.{os.getpid()}.{threading.get_ident()}.{uuid.uuid4().hex[:8]}"
    try:
        with open(tmp_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=MANIFEST_FIELDS)
            writer.writeheader()
            for key, record in sorted(table.records().items()):
                writer.writerow({
                    "path": key,
                    "compressed": record.compressed,
                    "size": record.size,
                    "modtime": record.modtime,
                    "local": record.local,
                    "is_dir": record.is_dir,
                })
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                pass
    logger.info("Manifest saved: %s (%d entries)", path, len(table))


def load_manifest(path: str) -> AssetTable:
    """Load an asset table from a CSV manifest file."""
    records: Dict[str, AssetRecord] = {}

    def _parse_bool(value, field_name: str, row_idx: int) -> bool:
        text = str(value).strip().lower()
        if text in {"1", "true", "yes", "y", "on"}:
            return True
        if text in {"0", "false", "no", "n", "off", ""}:
            return False
        raise ValueError(
            f"field '{field_name}' has invalid boolean value '{value}' at row {row_idx}"
        )

    try:
        with open(path, "r", newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row_idx, row in enumerate(reader, start=2):
                try:
                    required = ["path", "size"]
                    missing = [name for name in required if not row.get(name)]
                    if missing:
                        raise KeyError(f"missing required columns: {', '.join(missing)}")
                    records[row["path"]] = AssetRecord(
                        compressed=row.get("compressed") or "",
                        size=int(row["size"]),
                        modtime=int(row.get("modtime") or 0),
                        local=row.get("local") or "",
                        is_dir=_parse_bool(row.get("is_dir", "false"), "is_dir", row_idx),
                    )
                except Exception as e:
                    raise ValueError(
                        f"Failed to parse manifest '{path}' at row {row_idx}: {e}"
                    ) from e
    except OSError as e:
        raise OSError(f"Failed to read manifest '{path}': {e}") from e
    except csv.Error as e:
        raise ValueError(f"Malformed CSV manifest '{path}': {e}") from e
    logger.info("Loaded manifest %s (%d entries)", path, len(records))
    return AssetTable(records)
