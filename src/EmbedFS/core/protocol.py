"""Protocols shared by the filesystem backends and their file handles."""

from datetime import datetime
from typing import List, Protocol, runtime_checkable

from .files import FileInfo


@runtime_checkable
class AssetFile(Protocol):
    """Seekable, read-only file returned by :meth:`FileSystem.open`."""

    @property
    def name(self) -> str:
        ...

    @property
    def size(self) -> int:
        ...

    @property
    def mod_time(self) -> datetime:
        ...

    @property
    def is_dir(self) -> bool:
        ...

    def read(self, size: int = -1) -> bytes:
        ...

    def seek(self, offset: int, whence: int = 0) -> int:
        ...

    def tell(self) -> int:
        ...

    def stat(self) -> FileInfo:
        ...

    def readdir(self, count: int = 0) -> List[FileInfo]:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Read-only filesystem consumed by servers and application code.

    Implemented by the embedded backend, the local backend and the
    sub-path wrapper, so callers never depend on which one they hold.
    """

    def open(self, path: str) -> AssetFile:
        """Open ``path``.

        Raises:
            FileNotFoundError: the path does not exist (AssetNotFoundError
                for table lookups).
            CorruptAssetError: an embedded payload is unusable.
            OSError: any other local filesystem failure.
        """
        ...
