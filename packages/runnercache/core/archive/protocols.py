"""Protocol for archive codecs.

The cache orchestrator only depends on this interface; the tarfile
implementation lives in ``tar.py``.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from .models import CompressionMethod


class Archiver(Protocol):
    """
    Protocol for archive codecs (async-first).

    Paths handed to ``pack`` are relative to the archiver's workspace, and
    ``unpack`` restores them to the same workspace-relative locations.
    """

    async def pack(
        self, source_dir: Path, paths: Sequence[str], method: CompressionMethod
    ) -> Path:
        """
        Build a single archive from workspace-relative paths.

        Args:
            source_dir: Directory the archive file is created in
            paths: Workspace-relative paths to include
            method: Compression method

        Returns:
            Path of the created archive
        """
        ...

    async def unpack(self, archive_path: Path, method: CompressionMethod) -> None:
        """Extract an archive into the workspace, restoring the original layout."""
        ...

    async def list(self, archive_path: Path, method: CompressionMethod) -> list[str]:
        """List archive member names (used for debug output)."""
        ...

    def archive_file_name(self, method: CompressionMethod) -> str:
        """File name for an archive built with ``method``."""
        ...

    def size_of(self, path: Path) -> int:
        """Size of a file in bytes."""
        ...
