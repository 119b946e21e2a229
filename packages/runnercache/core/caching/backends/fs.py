"""Filesystem-backed blob store using core.io for all operations.

Entries live at ``<root>/<repository>/<ref>/<key>``, each component encoded
as a single path segment. Writes go through the atomic temp-file-and-replace
path of the FileSystem, so a reader never sees a partial archive.
"""

from collections.abc import AsyncIterable, AsyncIterator
import logging
from pathlib import Path

from runnercache.core.caching.errors import StoreError
from runnercache.core.caching.models import CacheScope
from runnercache.core.config.models import CacheSettings
from runnercache.core.io import (
    AbsolutePath,
    FileSystem,
    WriteResult,
    absolute_path,
    encode_path_component,
)

logger = logging.getLogger(__name__)


class FSBlobLocator:
    """
    Blob store rooted at ``settings.root`` on a FileSystem.

    Nothing is created until the first ``write``.
    """

    def __init__(self, fs: FileSystem, settings: CacheSettings) -> None:
        """
        Initialize filesystem blob store.

        Args:
            fs: Async filesystem implementation
            settings: Cache settings (root, repository, ref, chunk size)
        """
        self.fs = fs
        self.settings = settings
        self.root = absolute_path(settings.root) if settings.root is not None else None

    def resolve_scope(self) -> CacheScope | None:
        """Return the configured scope, or None when no root is configured."""
        if self.root is None:
            logger.warning("Cache not available: no storage root configured")
            return None

        scope = CacheScope(repository=self.settings.repository, ref=self.settings.ref)
        logger.debug(f"Cache scope {scope} under {self.root}")
        return scope

    def locate(self, scope: CacheScope, key: str) -> AbsolutePath:
        """Compute ``<root>/<repository>/<ref>/<key>`` (sync - no I/O)."""
        if self.root is None:
            raise StoreError("Cannot locate cache entries: no storage root configured")

        return self.fs.join(
            self.root,
            encode_path_component(scope.repository),
            encode_path_component(scope.ref),
            encode_path_component(key),
        )

    async def exists(self, address: AbsolutePath) -> bool:
        """
        Check for a complete entry.

        Missing files, directories and zero-length files (left behind by a
        truncated write) are all reported as a miss.
        """
        try:
            if not await self.fs.is_file(address):
                logger.debug(f"{address} not found")
                return False
            size = await self.fs.file_size(address)
        except OSError as e:
            logger.debug(f"{address} not readable: {e}")
            return False

        if size == 0:
            logger.debug(f"{address} is empty, treating as miss")
            return False

        logger.debug(f"Found {address} ({size} B)")
        return True

    async def read(self, address: AbsolutePath) -> AsyncIterator[bytes]:
        """Stream the entry at ``address``."""
        try:
            async for chunk in self.fs.read_chunks(address, self.settings.chunk_size):
                yield chunk
        except OSError as e:
            raise StoreError(f"Failed to read cache entry {address}: {e}") from e

    async def write(self, address: AbsolutePath, chunks: AsyncIterable[bytes]) -> WriteResult:
        """Store ``chunks`` at ``address``, creating missing directories first."""
        try:
            await self.fs.mkdirs(AbsolutePath(Path(address).parent), exist_ok=True)
            result = await self.fs.write_chunks(address, chunks)
        except OSError as e:
            raise StoreError(f"Failed to save archive to {address}: {e}") from e

        logger.debug(f"Saved {result.bytes_written} B to {address} in {result.duration_ms:.0f}ms")
        return result
