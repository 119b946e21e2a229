"""In-memory filesystem for fast, isolated testing.

Simulates filesystem operations without disk I/O.
Async operations complete immediately but maintain async interface.
"""

from collections.abc import AsyncIterable, AsyncIterator
from pathlib import Path

from .models import DEFAULT_CHUNK_SIZE, AbsolutePath, WriteResult


class FakeFileSystem:
    """
    In-memory async filesystem for testing.

    Simulates filesystem operations without disk I/O.
    Not thread-safe (use per-test instance).
    """

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = {"/"}  # Root always exists

    def join(self, base: AbsolutePath, *parts: str) -> AbsolutePath:
        """Join paths (sync - no I/O)."""
        result = Path(base).joinpath(*parts)

        # Normalize to absolute
        if not result.is_absolute():
            result = Path("/") / result

        return AbsolutePath(result)

    async def is_file(self, path: AbsolutePath) -> bool:
        """Check if file (async, immediate)."""
        return str(Path(path)) in self._files

    async def file_size(self, path: AbsolutePath) -> int:
        """Get file size (async, immediate)."""
        return len(self._get(path))

    async def read_chunks(
        self, path: AbsolutePath, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """Stream file contents (async, immediate)."""
        content = self._get(path)
        for offset in range(0, len(content), chunk_size):
            yield content[offset : offset + chunk_size]

    async def write_chunks(
        self,
        path: AbsolutePath,
        chunks: AsyncIterable[bytes],
    ) -> WriteResult:
        """Write streamed bytes (async, immediate)."""
        path_obj = Path(path)
        path_str = str(path_obj)

        # Auto-create parent directories
        self._ensure_parents(path_obj.parent)

        # Buffer first so a failing stream leaves no partial file
        content = b"".join([chunk async for chunk in chunks])
        self._files[path_str] = content

        return WriteResult(
            path=path_str,
            bytes_written=len(content),
            duration_ms=0.0,
        )

    def _get(self, path: AbsolutePath) -> bytes:
        path_str = str(Path(path))
        if path_str not in self._files:
            raise FileNotFoundError(f"File not found: {path}")
        return self._files[path_str]

    def _ensure_parents(self, path: Path) -> None:
        """Recursively create parent directories (sync helper)."""
        parts = path.parts
        for i in range(1, len(parts) + 1):
            dir_path = str(Path(*parts[:i]))
            self._dirs.add(dir_path)

    async def mkdirs(self, path: AbsolutePath, exist_ok: bool = True) -> None:
        """Create directory (async, immediate)."""
        path_str = str(Path(path))
        if not exist_ok and path_str in self._dirs:
            raise FileExistsError(f"Directory exists: {path}")
        self._ensure_parents(Path(path))
        self._dirs.add(path_str)

    async def rmdir(self, path: AbsolutePath, recursive: bool = False) -> None:
        """Remove directory (async, immediate)."""
        path_str = str(Path(path))
        if path_str not in self._dirs:
            raise FileNotFoundError(f"Directory not found: {path}")

        if recursive:
            # Remove all children
            to_remove_files = [p for p in self._files if p.startswith(path_str + "/")]
            to_remove_dirs = [p for p in self._dirs if p.startswith(path_str + "/")]
            for p in to_remove_files:
                del self._files[p]
            for p in to_remove_dirs:
                self._dirs.discard(p)

        self._dirs.discard(path_str)
