"""Error kinds raised by the embedded and local filesystems."""

import errno


class EmbedFSError(Exception):
    """Base exception for filesystem operations."""

    pass


class AssetNotFoundError(EmbedFSError, FileNotFoundError):
    """Raised when a path is not present in the asset table."""

    def __init__(self, path: str):
        super().__init__(errno.ENOENT, "Asset not found", path)
        self.path = path


class CorruptAssetError(EmbedFSError):
    """Raised when an embedded payload cannot be decoded or decompressed.

    Indicates a packaging defect. The failure is cached on the record, so
    every later access raises the same instance.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Corrupt embedded asset '{path}': {reason}")
        self.path = path
        self.reason = reason
