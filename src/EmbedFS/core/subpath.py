"""Mount a filesystem backend under a path prefix."""

from .protocol import AssetFile, FileSystem


class SubPathFileSystem:
    """Expose the subtree ``prefix`` of ``fs`` as a full filesystem.

    Paths are joined by plain concatenation, so ``prefix="/assets"`` and
    ``open("/img.png")`` resolve to ``/assets/img.png`` on ``fs``.
    """

    def __init__(self, fs: FileSystem, prefix: str):
        self.fs = fs
        self.prefix = prefix

    def open(self, path: str) -> AssetFile:
        return self.fs.open(self.prefix + path)

    def read_bytes(self, path: str) -> bytes:
        read_bytes = getattr(self.fs, "read_bytes", None)
        if read_bytes is not None:
            return read_bytes(self.prefix + path)
        with self.open(path) as f:
            return f.read()

    def __repr__(self) -> str:
        return f"SubPathFileSystem({self.fs!r}, prefix={self.prefix!r})"
