"""Archive codec and path resolution for cache entries."""

from runnercache.core.archive.models import CompressionMethod
from runnercache.core.archive.paths import resolve_paths, split_patterns
from runnercache.core.archive.protocols import Archiver
from runnercache.core.archive.tar import TarArchiver

__all__ = [
    "Archiver",
    "CompressionMethod",
    "TarArchiver",
    "resolve_paths",
    "split_patterns",
]
