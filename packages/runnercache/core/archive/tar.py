"""Tar archive codec.

Packs workspace-relative paths into a single (optionally compressed) tar file
and extracts it back into the workspace. Blocking tarfile work runs in the
default executor.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
import logging
import os
from pathlib import Path
import tarfile

from .models import CompressionMethod

logger = logging.getLogger(__name__)


class TarArchiver:
    """
    Archive codec backed by the standard library ``tarfile`` module.

    Members are stored under their workspace-relative names, so paths outside
    the workspace keep their ``..`` prefix and are restored to the same
    location. Extraction detects the compression from the archive itself.

    Example:
        >>> archiver = TarArchiver(Path("/work/repo"))
        >>> archive = await archiver.pack(tmp_dir, ["dist", "node_modules"], CompressionMethod.GZIP)
        >>> await archiver.unpack(archive, CompressionMethod.GZIP)
    """

    def __init__(self, workspace: Path) -> None:
        """
        Initialize archiver.

        Args:
            workspace: Directory that archive member names are relative to
        """
        self.workspace = Path(workspace)

    def archive_file_name(self, method: CompressionMethod) -> str:
        """File name for an archive built with ``method``."""
        return method.file_name

    def size_of(self, path: Path) -> int:
        """Size of a file in bytes."""
        return os.path.getsize(path)

    async def pack(
        self, source_dir: Path, paths: Sequence[str], method: CompressionMethod
    ) -> Path:
        """Create ``source_dir/<archive name>`` containing ``paths``."""
        archive_path = Path(source_dir) / self.archive_file_name(method)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._create, archive_path, list(paths), method)
        return archive_path

    async def unpack(self, archive_path: Path, method: CompressionMethod) -> None:
        """Extract ``archive_path`` into the workspace."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._extract, Path(archive_path))

    async def list(self, archive_path: Path, method: CompressionMethod) -> list[str]:
        """List member names of ``archive_path``."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._names, Path(archive_path))

    def _create(self, archive_path: Path, paths: list[str], method: CompressionMethod) -> None:
        with tarfile.open(archive_path, method.write_mode) as tar:
            for relative in paths:
                logger.debug(f"Adding to archive: {relative}")
                tar.add(self.workspace / relative, arcname=relative)

    def _extract(self, archive_path: Path) -> None:
        self.workspace.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive_path, "r:*") as tar:
            # Members may resolve outside the workspace (``../``), which the
            # "data" and "tar" filters reject.
            tar.extractall(path=self.workspace, filter="fully_trusted")

    def _names(self, archive_path: Path) -> list[str]:
        with tarfile.open(archive_path, "r:*") as tar:
            return tar.getnames()
