"""File handles returned by the filesystem backends."""

import io
import os
import stat as stat_module
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from .records import AssetRecord


@dataclass(frozen=True)
class FileInfo:
    """Metadata describing an opened file or directory."""

    name: str
    size: int
    mod_time: datetime
    is_dir: bool
    mode: int = 0


class EmbeddedFile(io.BytesIO):
    """Seekable read-only view over a decompressed embedded asset.

    The bytes are shared with the record; closing holds no OS resource and
    is a no-op.
    """

    def __init__(self, record: AssetRecord):
        super().__init__(record.data)
        self.record = record

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def size(self) -> int:
        return self.record.size

    @property
    def mod_time(self) -> datetime:
        return self.record.mod_time

    @property
    def is_dir(self) -> bool:
        return self.record.is_dir

    def writable(self) -> bool:
        return False

    def write(self, b):
        raise io.UnsupportedOperation("embedded assets are read-only")

    def writelines(self, lines):
        raise io.UnsupportedOperation("embedded assets are read-only")

    def truncate(self, size=None):
        raise io.UnsupportedOperation("embedded assets are read-only")

    def getbuffer(self):
        # A memoryview of the internal buffer is writable.
        raise io.UnsupportedOperation("embedded assets are read-only")

    def stat(self) -> FileInfo:
        return FileInfo(
            name=self.name,
            size=self.size,
            mod_time=self.mod_time,
            is_dir=self.is_dir,
        )

    def readdir(self, count: int = 0) -> List[FileInfo]:
        """Embedded assets cannot be enumerated; always empty."""
        return []

    def close(self) -> None:
        pass


def _info_from_stat(name: str, st: os.stat_result) -> FileInfo:
    return FileInfo(
        name=name,
        size=st.st_size,
        mod_time=datetime.fromtimestamp(int(st.st_mtime), tz=timezone.utc),
        is_dir=stat_module.S_ISDIR(st.st_mode),
        mode=stat_module.S_IMODE(st.st_mode),
    )


class LocalFile(io.RawIOBase):
    """Read-only handle over a real file or directory on disk.

    Directories have no content; :meth:`readdir` lists their entries.
    """

    def __init__(self, path: str, name: str):
        super().__init__()
        self.path = path
        self._name = name
        self._fh: Optional[io.BufferedReader] = None
        if os.path.isdir(path):
            self._is_dir = True
        else:
            self._fh = open(path, "rb")
            self._is_dir = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_dir(self) -> bool:
        return self._is_dir

    @property
    def size(self) -> int:
        return self.stat().size

    @property
    def mod_time(self) -> datetime:
        return self.stat().mod_time

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        self._check_closed()
        if self._fh is None:
            return 0
        return self._fh.readinto(b)

    def read(self, size: int = -1) -> bytes:
        self._check_closed()
        if self._fh is None:
            return b""
        return self._fh.read(size)

    def readall(self) -> bytes:
        return self.read(-1)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_closed()
        if self._fh is None:
            return 0
        return self._fh.seek(offset, whence)

    def tell(self) -> int:
        self._check_closed()
        if self._fh is None:
            return 0
        return self._fh.tell()

    def stat(self) -> FileInfo:
        self._check_closed()
        if self._fh is not None:
            st = os.fstat(self._fh.fileno())
        else:
            st = os.stat(self.path)
        return _info_from_stat(self._name, st)

    def readdir(self, count: int = 0) -> List[FileInfo]:
        """List directory entries (at most ``count`` when positive)."""
        self._check_closed()
        if not self._is_dir:
            return []
        infos = []
        with os.scandir(self.path) as it:
            for entry in sorted(it, key=lambda e: e.name):
                infos.append(_info_from_stat(entry.name, entry.stat()))
                if count > 0 and len(infos) >= count:
                    break
        return infos

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
        super().close()

    def _check_closed(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
