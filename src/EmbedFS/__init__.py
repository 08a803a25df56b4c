"""Provide package metadata and the public API of `EmbedFS`."""

from .config import EmbedFSConfig
from .core import (
    AssetNotFoundError,
    AssetRecord,
    AssetTable,
    CorruptAssetError,
    EmbedFSError,
    EmbeddedFileSystem,
    FileInfo,
    FileSystem,
    LocalFileSystem,
    SubPathFileSystem,
    setup_logging,
)
from .facade import StaticAssets

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "EmbedFSConfig",
    "StaticAssets",
    "AssetTable",
    "AssetRecord",
    "EmbeddedFileSystem",
    "LocalFileSystem",
    "SubPathFileSystem",
    "FileSystem",
    "FileInfo",
    "EmbedFSError",
    "AssetNotFoundError",
    "CorruptAssetError",
    "setup_logging",
]
