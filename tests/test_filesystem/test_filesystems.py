"""Tests for the local and stub filesystems."""
from __future__ import annotations

import os

import pytest

from lesschanged.filesystem import LocalFileSystem, StubFileSystem


# ---------------------------------------------------------------------------
# LocalFileSystem
# ---------------------------------------------------------------------------


class TestLocalFileSystem:
    @pytest.mark.asyncio
    async def test_stat_file(self, tmp_path) -> None:
        target = tmp_path / "a.less"
        target.write_text(".a {}")
        stat = await LocalFileSystem().stat(str(target))
        assert stat.is_file
        assert stat.size == 5
        assert stat.mtime_ns == os.stat(target).st_mtime_ns

    @pytest.mark.asyncio
    async def test_stat_directory_is_not_a_file(self, tmp_path) -> None:
        stat = await LocalFileSystem().stat(str(tmp_path))
        assert not stat.is_file

    @pytest.mark.asyncio
    async def test_stat_missing_raises(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            await LocalFileSystem().stat(str(tmp_path / "missing.less"))

    @pytest.mark.asyncio
    async def test_read_bytes_and_text(self, tmp_path) -> None:
        target = tmp_path / "a.less"
        target.write_bytes("// é\n".encode("utf-8"))
        fs = LocalFileSystem()
        assert await fs.read_bytes(str(target)) == "// é\n".encode("utf-8")
        assert await fs.read_text(str(target)) == "// é\n"


# ---------------------------------------------------------------------------
# StubFileSystem
# ---------------------------------------------------------------------------


class TestStubFileSystem:
    @pytest.mark.asyncio
    async def test_initial_files(self) -> None:
        fs = StubFileSystem({"/src/a.less": ".a {}"})
        assert await fs.read_text("/src/a.less") == ".a {}"
        assert await fs.read_bytes("/src/a.less") == b".a {}"

    @pytest.mark.asyncio
    async def test_paths_are_normalized(self) -> None:
        fs = StubFileSystem({"/src/a.less": ""})
        assert fs.exists("/src/lib/../a.less")
        stat = await fs.stat("/src/./a.less")
        assert stat.size == 0

    @pytest.mark.asyncio
    async def test_missing_file(self) -> None:
        fs = StubFileSystem()
        with pytest.raises(FileNotFoundError):
            await fs.stat("/src/missing.less")
        with pytest.raises(FileNotFoundError):
            await fs.read_bytes("/src/missing.less")

    @pytest.mark.asyncio
    async def test_touch_advances_mtime(self) -> None:
        fs = StubFileSystem({"/src/a.less": ".a {}"})
        before = (await fs.stat("/src/a.less")).mtime_ns
        fs.touch("/src/a.less")
        after = (await fs.stat("/src/a.less")).mtime_ns
        assert after > before

    def test_touch_missing_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            StubFileSystem().touch("/src/a.less")

    @pytest.mark.asyncio
    async def test_explicit_mtime(self) -> None:
        fs = StubFileSystem()
        fs.write("/src/a.less", ".a {}", mtime_ns=42)
        assert (await fs.stat("/src/a.less")).mtime_ns == 42

    @pytest.mark.asyncio
    async def test_remove(self) -> None:
        fs = StubFileSystem({"/src/a.less": ""})
        fs.remove("/src/a.less")
        assert not fs.exists("/src/a.less")
        with pytest.raises(FileNotFoundError):
            await fs.stat("/src/a.less")

    @pytest.mark.asyncio
    async def test_fault_injection(self) -> None:
        fs = StubFileSystem({"/src/a.less": ""})
        fs.fail("/src/a.less", PermissionError("denied"))
        with pytest.raises(PermissionError):
            await fs.stat("/src/a.less")
        with pytest.raises(PermissionError):
            await fs.read_text("/src/a.less")

    @pytest.mark.asyncio
    async def test_stat_calls_are_recorded(self) -> None:
        fs = StubFileSystem({"/src/a.less": ""})
        await fs.stat("/src/a.less")
        with pytest.raises(FileNotFoundError):
            await fs.stat("/src/b.less")
        assert fs.stat_calls == ["/src/a.less", "/src/b.less"]
