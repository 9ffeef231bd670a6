"""Tests for async file helpers."""

from unittest.mock import patch

import pytest

from editbench.infra import fs


class TestFs:
    @pytest.mark.asyncio
    async def test_write_then_read(self, tmp_path):
        path = tmp_path / "f.txt"
        await fs.write_text(path, "x\r\ny\n")
        assert await fs.read_text(path) == "x\r\ny\n"

    @pytest.mark.asyncio
    async def test_read_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await fs.read_text(tmp_path / "missing.txt")

    @pytest.mark.asyncio
    async def test_exists_is_false_for_directories(self, tmp_path):
        assert not await fs.exists(tmp_path)
        path = tmp_path / "f.txt"
        path.write_text("")
        assert await fs.exists(path)

    @pytest.mark.asyncio
    async def test_failed_write_keeps_original(self, tmp_path):
        path = tmp_path / "f.txt"
        path.write_text("original")
        with patch("editbench.infra.fs.os.replace", side_effect=OSError("nope")):
            with pytest.raises(OSError):
                await fs.write_text(path, "new")
        assert path.read_text() == "original"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["f.txt"]

    @pytest.mark.asyncio
    async def test_copy_file(self, tmp_path):
        source = tmp_path / "a.txt"
        source.write_bytes(b"\x00bytes")
        target = tmp_path / "b.txt"
        await fs.copy_file(source, target)
        assert target.read_bytes() == b"\x00bytes"

    @pytest.mark.asyncio
    async def test_ensure_dir(self, tmp_path):
        target = tmp_path / "a" / "b"
        await fs.ensure_dir(target)
        await fs.ensure_dir(target)
        assert target.is_dir()

    @pytest.mark.asyncio
    async def test_write_keeps_permission_bits(self, tmp_path):
        path = tmp_path / "script.sh"
        path.write_text("echo hi\n")
        path.chmod(0o755)
        await fs.write_text(path, "echo bye\n")
        assert path.stat().st_mode & 0o777 == 0o755
        assert path.read_text() == "echo bye\n"

    @pytest.mark.asyncio
    async def test_write_follows_symlink(self, tmp_path):
        real = tmp_path / "real.txt"
        real.write_text("a\n")
        link = tmp_path / "link.txt"
        link.symlink_to(real)
        await fs.write_text(link, "b\n")
        assert link.is_symlink()
        assert real.read_text() == "b\n"

    @pytest.mark.asyncio
    async def test_copy_follows_symlink_and_keeps_mode(self, tmp_path):
        real = tmp_path / "real.sh"
        real.write_text("old\n")
        real.chmod(0o750)
        link = tmp_path / "link.sh"
        link.symlink_to(real)
        source = tmp_path / "src.txt"
        source.write_text("new\n")
        await fs.copy_file(source, link)
        assert link.is_symlink()
        assert real.read_text() == "new\n"
        assert real.stat().st_mode & 0o777 == 0o750

    @pytest.mark.asyncio
    async def test_repeated_writes_leave_only_target(self, tmp_path):
        path = tmp_path / "f.txt"
        path.write_text("0")
        for n in range(5):
            await fs.write_text(path, str(n))
        assert sorted(p.name for p in tmp_path.iterdir()) == ["f.txt"]
        assert path.read_text() == "4"
