"""Cache orchestration: restore and save entry points.

Sequences validation, scope lookup, key scan, archive transfer and
extraction/packaging, and removes temporary archives on every exit path.

Failure policy:
- ValidationError, CapacityError and NoCacheablePathsError propagate
- An unconfigured store yields an UNAVAILABLE outcome
- Store and codec failures are logged as warnings and yield a FAILED outcome
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from functools import partial
import logging
from pathlib import Path
import tempfile

from runnercache.core.archive import Archiver, CompressionMethod, TarArchiver, resolve_paths
from runnercache.core.caching.backends.fs import FSBlobLocator
from runnercache.core.caching.errors import (
    CapacityError,
    NoCacheablePathsError,
    ValidationError,
)
from runnercache.core.caching.models import (
    CacheScope,
    RestoreOptions,
    RestoreOutcome,
    RestoreResult,
    SaveOptions,
    SaveOutcome,
    SaveResult,
)
from runnercache.core.caching.protocols import BlobLocator
from runnercache.core.caching.validation import validate_key, validate_keys, validate_paths
from runnercache.core.config.models import CacheSettings
from runnercache.core.io import AbsolutePath, FileSystem, RealFileSystem, absolute_path
from runnercache.core.utils.formatting import format_size

logger = logging.getLogger(__name__)


class CacheService:
    """Restores and saves path sets under content keys.

    Example:
        >>> service = CacheService(load_settings())
        >>> result = await service.restore(["node_modules"], "npm-abc123", ["npm-"])
        >>> if result.outcome != RestoreOutcome.HIT:
        ...     install_dependencies()
        ...     await service.save(["node_modules"], "npm-abc123")
    """

    def __init__(
        self,
        settings: CacheSettings,
        locator: BlobLocator | None = None,
        archiver: Archiver | None = None,
        local_fs: FileSystem | None = None,
    ) -> None:
        """
        Initialize cache service.

        Args:
            settings: Cache settings
            locator: Blob store (defaults to FSBlobLocator on the real filesystem)
            archiver: Archive codec (defaults to TarArchiver on the workspace)
            local_fs: Filesystem holding temporary archives
        """
        self.settings = settings
        self.local_fs = local_fs or RealFileSystem()
        self.locator = locator or FSBlobLocator(RealFileSystem(), settings)
        self.archiver = archiver or TarArchiver(settings.workspace)

    async def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
        options: RestoreOptions | None = None,
    ) -> RestoreResult:
        """Restore the first entry found for ``[primary_key, *restore_keys]``.

        Args:
            paths: Path patterns the entry was saved from
            primary_key: Exact key probed first
            restore_keys: Ordered fallback keys probed after a primary miss
            options: Per-call options (lookup-only)

        Returns:
            RestoreResult (HIT, MISS, UNAVAILABLE or FAILED)

        Raises:
            ValidationError: On invalid paths or keys, before any store access
        """
        options = options or RestoreOptions()

        validate_paths(paths)
        keys = validate_keys(primary_key, restore_keys)
        logger.debug(f"Resolved Keys: {keys}")

        scope = self.locator.resolve_scope()
        if scope is None:
            return RestoreResult(outcome=RestoreOutcome.UNAVAILABLE, primary_key=primary_key)

        match = await self._find_entry(scope, keys)
        if match is None:
            logger.info(f"Cache not found for input keys: {', '.join(keys)}")
            return RestoreResult(outcome=RestoreOutcome.MISS, primary_key=primary_key)

        matched_key, address = match
        logger.info(f"Cache hit for: {matched_key}")

        if options.lookup_only:
            logger.info("Lookup only - skipping download")
            return RestoreResult(
                outcome=RestoreOutcome.HIT, primary_key=primary_key, matched_key=matched_key
            )

        method = self.settings.compression
        try:
            async with self._temporary_directory() as archive_dir:
                archive_path = self.local_fs.join(
                    archive_dir, self.archiver.archive_file_name(method)
                )
                logger.debug(f"Archive Path: {archive_path}")

                await self.local_fs.write_chunks(archive_path, self.locator.read(address))
                archive_bytes = self.archiver.size_of(Path(archive_path))
                logger.info(f"Cache Size: {format_size(archive_bytes)}")

                await self._log_manifest(Path(archive_path), method)
                await self.archiver.unpack(Path(archive_path), method)
        except Exception as e:
            logger.warning(f"Failed to restore: {e}")
            return RestoreResult(
                outcome=RestoreOutcome.FAILED, primary_key=primary_key, error=str(e)
            )

        logger.info("Cache restored successfully")
        return RestoreResult(
            outcome=RestoreOutcome.HIT,
            primary_key=primary_key,
            matched_key=matched_key,
            archive_bytes=archive_bytes,
        )

    async def save(
        self,
        paths: Sequence[str],
        key: str,
        options: SaveOptions | None = None,
    ) -> SaveResult:
        """Package ``paths`` and store the archive under ``key``.

        Args:
            paths: Path patterns to cache
            key: Target key (an existing entry is overwritten)
            options: Per-call options (compression override)

        Returns:
            SaveResult (SAVED, UNAVAILABLE or FAILED)

        Raises:
            ValidationError: On invalid paths or key
            NoCacheablePathsError: If no path matches
            CapacityError: If the archive exceeds the size ceiling
        """
        options = options or SaveOptions()

        validate_paths(paths)
        validate_key(key)

        scope = self.locator.resolve_scope()
        if scope is None:
            return SaveResult(outcome=SaveOutcome.UNAVAILABLE, key=key)
        address = self.locator.locate(scope, key)

        loop = asyncio.get_running_loop()
        cache_paths = await loop.run_in_executor(
            None, resolve_paths, list(paths), self.settings.workspace
        )
        logger.debug(f"Cache Paths: {cache_paths}")
        if not cache_paths:
            raise NoCacheablePathsError(
                "Path Validation Error: Path(s) specified for caching do(es) not exist, "
                "hence no cache is being saved."
            )

        method = options.compression or self.settings.compression
        try:
            async with self._temporary_directory() as archive_dir:
                archive_path = await self.archiver.pack(Path(archive_dir), cache_paths, method)
                logger.debug(f"Archive Path: {archive_path}")
                await self._log_manifest(archive_path, method)

                archive_bytes = self.archiver.size_of(archive_path)
                logger.debug(f"File Size: {archive_bytes}")
                self._check_size(archive_bytes)

                await self.locator.write(
                    address,
                    self.local_fs.read_chunks(absolute_path(archive_path), self.settings.chunk_size),
                )
        except (ValidationError, CapacityError):
            raise
        except Exception as e:
            logger.warning(f"Failed to save: {e}")
            return SaveResult(outcome=SaveOutcome.FAILED, key=key, error=str(e))

        logger.info(f"Cache saved with key: {key}")
        return SaveResult(outcome=SaveOutcome.SAVED, key=key, archive_bytes=archive_bytes)

    async def _find_entry(
        self, scope: CacheScope, keys: Sequence[str]
    ) -> tuple[str, AbsolutePath] | None:
        """Probe keys in order; the first existing entry wins."""
        for key in keys:
            address = self.locator.locate(scope, key)
            if await self.locator.exists(address):
                return key, address
            logger.debug(f"Cache not found for key: {key}")
        return None

    def _check_size(self, archive_bytes: int) -> None:
        limit = self.settings.max_archive_bytes
        if archive_bytes > limit:
            raise CapacityError(
                f"Cache size of {format_size(archive_bytes)} is over the "
                f"{format_size(limit)} limit, not saving cache.",
                size_bytes=archive_bytes,
                limit_bytes=limit,
            )

    async def _log_manifest(self, archive_path: Path, method: CompressionMethod) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        for name in await self.archiver.list(archive_path, method):
            logger.debug(f"  {name}")

    @asynccontextmanager
    async def _temporary_directory(self) -> AsyncIterator[AbsolutePath]:
        """Private temp directory, removed on every exit path (including cancellation)."""
        if self.settings.temp_dir is not None:
            await self.local_fs.mkdirs(absolute_path(self.settings.temp_dir), exist_ok=True)

        loop = asyncio.get_running_loop()
        created = await loop.run_in_executor(
            None, partial(tempfile.mkdtemp, prefix="runnercache-", dir=self.settings.temp_dir)
        )
        archive_dir = absolute_path(created)
        try:
            yield archive_dir
        finally:
            try:
                await self.local_fs.rmdir(archive_dir, recursive=True)
            except OSError as e:
                logger.debug(f"Failed to delete archive: {e}")


def is_feature_available(settings: CacheSettings) -> bool:
    """Whether a backing store is configured."""
    return settings.available


async def restore_cache(
    settings: CacheSettings,
    paths: Sequence[str],
    primary_key: str,
    restore_keys: Sequence[str] | None = None,
    options: RestoreOptions | None = None,
) -> str | None:
    """Restore a cache entry; returns the matched key, or None on miss/failure."""
    result = await CacheService(settings).restore(paths, primary_key, restore_keys, options)
    return result.matched_key


async def save_cache(
    settings: CacheSettings,
    paths: Sequence[str],
    key: str,
    options: SaveOptions | None = None,
) -> int:
    """Save a cache entry; returns ``1`` when stored and ``-1`` otherwise."""
    result = await CacheService(settings).save(paths, key, options)
    return result.cache_id
