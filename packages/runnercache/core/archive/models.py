"""Archive format models."""

from enum import Enum


class CompressionMethod(str, Enum):
    """Compression applied to cache archives."""

    GZIP = "gzip"
    XZ = "xz"
    NONE = "none"

    @property
    def file_name(self) -> str:
        """Archive file name used for this method inside a temp directory."""
        return _FILE_NAMES[self]

    @property
    def write_mode(self) -> str:
        """tarfile mode used when packing with this method."""
        return _WRITE_MODES[self]


_FILE_NAMES = {
    CompressionMethod.GZIP: "cache.tgz",
    CompressionMethod.XZ: "cache.txz",
    CompressionMethod.NONE: "cache.tar",
}

_WRITE_MODES = {
    CompressionMethod.GZIP: "w:gz",
    CompressionMethod.XZ: "w:xz",
    CompressionMethod.NONE: "w",
}
