"""Shared pytest fixtures for runnercache tests."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator
from pathlib import Path

import pytest

from runnercache.core.caching import CacheScope, FSBlobLocator
from runnercache.core.config import CacheSettings
from runnercache.core.io import AbsolutePath, RealFileSystem, WriteResult

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Provide an empty workspace directory."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Provide the backing store root (not created up front)."""
    return tmp_path / "store"


@pytest.fixture
def runner_temp(tmp_path: Path) -> Path:
    """Provide the parent directory for temporary archives."""
    return tmp_path / "runner-temp"


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def settings(workspace: Path, store_root: Path, runner_temp: Path) -> CacheSettings:
    """Provide settings with a configured store."""
    return CacheSettings(
        root=store_root,
        repository="acme/widgets",
        ref="main",
        workspace=workspace,
        temp_dir=runner_temp,
    )


@pytest.fixture
def unavailable_settings(workspace: Path, runner_temp: Path) -> CacheSettings:
    """Provide settings without a store root."""
    return CacheSettings(workspace=workspace, temp_dir=runner_temp)


# ============================================================================
# Store Doubles
# ============================================================================


class RecordingLocator:
    """FSBlobLocator wrapper that records every store call."""

    def __init__(self, settings: CacheSettings) -> None:
        self._inner = FSBlobLocator(RealFileSystem(), settings)
        self.calls: list[tuple[str, str]] = []

    def resolve_scope(self) -> CacheScope | None:
        self.calls.append(("resolve_scope", ""))
        return self._inner.resolve_scope()

    def locate(self, scope: CacheScope, key: str) -> AbsolutePath:
        self.calls.append(("locate", key))
        return self._inner.locate(scope, key)

    async def exists(self, address: AbsolutePath) -> bool:
        self.calls.append(("exists", Path(address).name))
        return await self._inner.exists(address)

    async def read(self, address: AbsolutePath) -> AsyncIterator[bytes]:
        self.calls.append(("read", Path(address).name))
        async for chunk in self._inner.read(address):
            yield chunk

    async def write(self, address: AbsolutePath, chunks: AsyncIterable[bytes]) -> WriteResult:
        self.calls.append(("write", Path(address).name))
        return await self._inner.write(address, chunks)

    def calls_named(self, name: str) -> list[str]:
        return [arg for call, arg in self.calls if call == name]


@pytest.fixture
def recording_locator(settings: CacheSettings) -> RecordingLocator:
    """Provide a locator that records store calls."""
    return RecordingLocator(settings)
