"""Core utilities -- re-exports all public symbols for convenience."""

from .errors import EmbedFSError, AssetNotFoundError, CorruptAssetError
from .paths import clean_path, base_name, local_join
from .records import AssetRecord, decode_payload
from .table import AssetTable
from .files import FileInfo, EmbeddedFile, LocalFile
from .protocol import AssetFile, FileSystem
from .embedded import EmbeddedFileSystem
from .local import LocalFileSystem
from .subpath import SubPathFileSystem
from .scanning import encode_payload, scan_assets, save_manifest, load_manifest
from .logging import setup_logging

__all__ = [
    "EmbedFSError", "AssetNotFoundError", "CorruptAssetError",
    "clean_path", "base_name", "local_join",
    "AssetRecord", "decode_payload",
    "AssetTable",
    "FileInfo", "EmbeddedFile", "LocalFile",
    "AssetFile", "FileSystem",
    "EmbeddedFileSystem", "LocalFileSystem", "SubPathFileSystem",
    "encode_payload", "scan_assets", "save_manifest", "load_manifest",
    "setup_logging",
]
