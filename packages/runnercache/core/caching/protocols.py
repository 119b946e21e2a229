"""Protocols for cache storage backends."""

from collections.abc import AsyncIterable, AsyncIterator
from typing import Protocol

from runnercache.core.caching.models import CacheScope
from runnercache.core.io import AbsolutePath, WriteResult


class BlobLocator(Protocol):
    """
    Protocol for key → blob stores.

    Maps (scope, key) pairs to addresses and moves archive bytes in and out
    of the backing store. Implementations must:
    - Report an unconfigured store via ``resolve_scope() -> None`` (not an error)
    - Treat missing and zero-length blobs identically as a miss
    - Never expose a partially written blob to ``exists``/``read``
    """

    def resolve_scope(self) -> CacheScope | None:
        """
        Derive the cache scope from the injected settings.

        Returns:
            CacheScope, or None when no storage root is configured
        """
        ...

    def locate(self, scope: CacheScope, key: str) -> AbsolutePath:
        """
        Compute the storage address for a key (pure, creates nothing).

        Args:
            scope: Cache scope
            key: Cache key

        Returns:
            Address of the entry
        """
        ...

    async def exists(self, address: AbsolutePath) -> bool:
        """Check for a non-empty blob at ``address``."""
        ...

    def read(self, address: AbsolutePath) -> AsyncIterator[bytes]:
        """
        Stream the blob at ``address``.

        Raises:
            StoreError: On read failure (raised while iterating)
        """
        ...

    async def write(self, address: AbsolutePath, chunks: AsyncIterable[bytes]) -> WriteResult:
        """
        Store streamed bytes at ``address``, creating missing parent directories.

        Raises:
            StoreError: On write failure
        """
        ...
