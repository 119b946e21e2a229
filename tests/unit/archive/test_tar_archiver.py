"""Tests for TarArchiver (async).

Packs and unpacks real directories under pytest's tmp_path.
"""

from pathlib import Path
import shutil
import tarfile

import pytest

from runnercache.core.archive import CompressionMethod, TarArchiver


@pytest.fixture
def archiver(workspace: Path) -> TarArchiver:
    return TarArchiver(workspace)


@pytest.fixture
def archive_dir(tmp_path: Path) -> Path:
    path = tmp_path / "archive"
    path.mkdir()
    return path


def _populate(workspace: Path) -> None:
    (workspace / "dist" / "js").mkdir(parents=True)
    (workspace / "dist" / "index.html").write_text("<html></html>")
    (workspace / "dist" / "js" / "app.js").write_bytes(b"\x00console.log(1)\xff")
    (workspace / "VERSION").write_text("1.2.3\n")


class TestArchiveNames:
    """Tests for archive file naming."""

    @pytest.mark.parametrize(
        ("method", "name"),
        [
            (CompressionMethod.GZIP, "cache.tgz"),
            (CompressionMethod.XZ, "cache.txz"),
            (CompressionMethod.NONE, "cache.tar"),
        ],
    )
    def test_file_name_per_method(self, archiver: TarArchiver, method, name):
        assert archiver.archive_file_name(method) == name


class TestPack:
    """Tests for packing."""

    async def test_pack_creates_archive_in_source_dir(
        self, archiver: TarArchiver, workspace: Path, archive_dir: Path
    ):
        """Test pack writes the archive into the given directory."""
        _populate(workspace)
        archive = await archiver.pack(archive_dir, ["dist", "VERSION"], CompressionMethod.GZIP)

        assert archive == archive_dir / "cache.tgz"
        assert archiver.size_of(archive) > 0

    async def test_members_are_workspace_relative(
        self, archiver: TarArchiver, workspace: Path, archive_dir: Path
    ):
        """Test member names are stored relative to the workspace."""
        _populate(workspace)
        archive = await archiver.pack(archive_dir, ["dist"], CompressionMethod.NONE)

        with tarfile.open(archive) as tar:
            names = set(tar.getnames())
        assert {"dist", "dist/index.html", "dist/js", "dist/js/app.js"} <= names
        assert not any(name.startswith("/") for name in names)

    async def test_list_reports_members(
        self, archiver: TarArchiver, workspace: Path, archive_dir: Path
    ):
        """Test list returns the archive manifest."""
        _populate(workspace)
        archive = await archiver.pack(archive_dir, ["VERSION"], CompressionMethod.XZ)

        assert await archiver.list(archive, CompressionMethod.XZ) == ["VERSION"]


class TestUnpack:
    """Tests for unpacking."""

    @pytest.mark.parametrize("method", list(CompressionMethod))
    async def test_unpack_restores_original_layout(
        self, archiver: TarArchiver, workspace: Path, archive_dir: Path, method
    ):
        """Test unpack reproduces byte-identical files at their original locations."""
        _populate(workspace)
        archive = await archiver.pack(archive_dir, ["dist", "VERSION"], method)
        shutil.rmtree(workspace / "dist")
        (workspace / "VERSION").unlink()

        await archiver.unpack(archive, method)

        assert (workspace / "dist" / "js" / "app.js").read_bytes() == b"\x00console.log(1)\xff"
        assert (workspace / "dist" / "index.html").read_text() == "<html></html>"
        assert (workspace / "VERSION").read_text() == "1.2.3\n"

    async def test_unpack_detects_compression(
        self, archiver: TarArchiver, workspace: Path, archive_dir: Path
    ):
        """Test extraction does not depend on the method it is called with."""
        _populate(workspace)
        archive = await archiver.pack(archive_dir, ["VERSION"], CompressionMethod.XZ)
        (workspace / "VERSION").unlink()

        await archiver.unpack(archive, CompressionMethod.GZIP)

        assert (workspace / "VERSION").exists()

    async def test_paths_outside_workspace_round_trip(self, tmp_path: Path, archive_dir: Path):
        """Test ``..`` members are restored next to the workspace."""
        workspace = tmp_path / "repo"
        workspace.mkdir()
        sibling = tmp_path / "tool-cache"
        sibling.mkdir()
        (sibling / "bin").write_text("tool")

        archiver = TarArchiver(workspace)
        archive = await archiver.pack(archive_dir, ["../tool-cache"], CompressionMethod.GZIP)
        shutil.rmtree(sibling)

        await archiver.unpack(archive, CompressionMethod.GZIP)

        assert (sibling / "bin").read_text() == "tool"

    async def test_unpack_corrupt_archive_raises(self, archiver: TarArchiver, archive_dir: Path):
        """Test a corrupt archive raises instead of extracting partially."""
        corrupt = archive_dir / "cache.tgz"
        corrupt.write_bytes(b"definitely not a tarball")

        with pytest.raises(tarfile.TarError):
            await archiver.unpack(corrupt, CompressionMethod.GZIP)
