"""Filesystem abstraction layer for runnercache.

Provides safe, testable, async-first filesystem operations.

Example:
    >>> from runnercache.core.io import RealFileSystem, absolute_path
    >>> fs = RealFileSystem()
    >>> path = fs.join(absolute_path("/tmp"), "cache", "blob")
    >>> await fs.write_chunks(path, source_fs.read_chunks(archive))
    >>> size = await fs.file_size(path)
"""

from .impl_fake import FakeFileSystem
from .impl_real import RealFileSystem
from .models import DEFAULT_CHUNK_SIZE, AbsolutePath, WriteResult, absolute_path
from .protocols import FileSystem
from .utils import MAX_COMPONENT_LENGTH, encode_path_component

__all__ = [
    # Path types and constructors
    "AbsolutePath",
    "absolute_path",
    "DEFAULT_CHUNK_SIZE",
    # Result types
    "WriteResult",
    # Protocols
    "FileSystem",
    # Implementations
    "RealFileSystem",
    "FakeFileSystem",
    # Utilities
    "encode_path_component",
    "MAX_COMPONENT_LENGTH",
]
