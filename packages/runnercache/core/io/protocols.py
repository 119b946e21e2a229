"""Protocols for filesystem operations.

Defines the async-first FileSystem protocol used by the blob store.
"""

from collections.abc import AsyncIterable, AsyncIterator
from typing import Protocol

from .models import DEFAULT_CHUNK_SIZE, AbsolutePath, WriteResult


class FileSystem(Protocol):
    """
    Protocol for async filesystem operations.

    All implementations must provide atomic write semantics and
    handle platform-specific details transparently.
    """

    # Path operations (sync - no I/O)
    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """
        Safely join path components.

        Args:
            base: Base absolute path
            *parts: Path segments to join

        Returns:
            New absolute path

        Raises:
            ValueError: If result escapes base directory
        """
        ...

    # Existence checks (async)
    async def is_file(self, path: AbsolutePath) -> bool:
        """Check if path exists and is a file."""
        ...

    async def file_size(self, path: AbsolutePath) -> int:
        """
        Size of a file in bytes.

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        ...

    # Read operations (async)
    def read_chunks(
        self, path: AbsolutePath, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """
        Stream file contents.

        Args:
            path: File path
            chunk_size: Maximum size of each yielded chunk

        Returns:
            Async iterator of byte chunks

        Raises:
            FileNotFoundError: If file doesn't exist
            IOError: On read failure
        """
        ...

    # Write operations (async, atomic)
    async def write_chunks(
        self,
        path: AbsolutePath,
        chunks: AsyncIterable[bytes],
    ) -> WriteResult:
        """
        Atomically write streamed bytes to file.

        Creates missing parent directories, then uses temp file + atomic
        replace to ensure readers never observe partial writes.

        Args:
            path: Target file path
            chunks: Byte chunks to write, in order

        Returns:
            WriteResult with metadata

        Raises:
            IOError: On write failure
        """
        ...

    # Directory operations (async)
    async def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """
        Create directory and all parents.

        Raises:
            IOError: On creation failure
        """
        ...

    # Removal operations (async)
    async def rmdir(self, path: AbsolutePath, recursive: bool = False) -> None:
        """
        Remove a directory.

        Raises:
            FileNotFoundError: If directory doesn't exist
        """
        ...
