"""Real filesystem implementation using aiofiles for async I/O.

Provides atomic writes via temp file + os.replace().
"""

import asyncio
from collections.abc import AsyncIterable, AsyncIterator
import contextlib
import os
from pathlib import Path
import shutil
from tempfile import NamedTemporaryFile
import time

import aiofiles  # type: ignore[import-untyped]
import aiofiles.os  # type: ignore[import-untyped]

from .models import DEFAULT_CHUNK_SIZE, AbsolutePath, WriteResult


class RealFileSystem:
    """
    Real filesystem implementation using aiofiles for async I/O.

    Provides atomic writes via temp file + os.replace().
    """

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """Join paths (sync - no I/O).

        Normalized lexically; symlinked directories below ``base`` are not
        resolved, so they may point anywhere.
        """
        base_normalized = Path(os.path.normpath(base))
        result = Path(os.path.normpath(base_normalized.joinpath(*parts)))

        # Security: Ensure result is still under base
        try:
            result.relative_to(base_normalized)
        except ValueError as e:
            raise ValueError(f"Path traversal detected: {result} escapes {base}") from e

        return AbsolutePath(result)

    async def is_file(self, path: AbsolutePath) -> bool:
        """Check if file asynchronously."""
        return bool(await aiofiles.os.path.isfile(path))

    async def file_size(self, path: AbsolutePath) -> int:
        """Get file size asynchronously."""
        stat = await aiofiles.os.stat(path)
        return int(stat.st_size)

    async def read_chunks(
        self, path: AbsolutePath, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """Stream file contents asynchronously."""
        async with aiofiles.open(path, mode="rb") as f:
            while True:
                chunk: bytes = await f.read(chunk_size)
                if not chunk:
                    break
                yield chunk

    async def write_chunks(
        self,
        path: AbsolutePath,
        chunks: AsyncIterable[bytes],
    ) -> WriteResult:
        """Atomically write streamed bytes asynchronously."""
        start = time.perf_counter()
        path_obj = Path(path)

        # Ensure parent directory exists
        await aiofiles.os.makedirs(path_obj.parent, exist_ok=True)

        # Atomic write: temp file → replace
        # Create temp file in same directory for atomic replace
        loop = asyncio.get_running_loop()

        def create_temp_file() -> str:
            tmp = NamedTemporaryFile(
                mode="wb",
                dir=path_obj.parent,
                prefix=f".{path_obj.name}.",
                delete=False,
            )
            tmp_path = tmp.name
            tmp.close()
            return tmp_path

        tmp_path = await loop.run_in_executor(None, create_temp_file)
        bytes_written = 0

        try:
            async with aiofiles.open(tmp_path, mode="wb") as f:
                async for chunk in chunks:
                    await f.write(chunk)
                    bytes_written += len(chunk)

            # Atomic replace (os.replace is fast, run in executor)
            await loop.run_in_executor(None, os.replace, tmp_path, str(path))
        except BaseException:
            # Clean up temp on failure or cancellation
            with contextlib.suppress(OSError):
                await aiofiles.os.unlink(tmp_path)
            raise

        duration = (time.perf_counter() - start) * 1000

        return WriteResult(
            path=str(path),
            bytes_written=bytes_written,
            duration_ms=duration,
        )

    async def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory and parents asynchronously."""
        await aiofiles.os.makedirs(path, exist_ok=exist_ok)

    async def rmdir(self, path: AbsolutePath, recursive: bool = False) -> None:
        """Remove directory asynchronously."""
        if recursive:
            # shutil.rmtree is blocking, run in executor
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, shutil.rmtree, str(path))
        else:
            await aiofiles.os.rmdir(path)
