from __future__ import annotations

import os

import pytest

from lesschanged.errors import ImportNotFoundError
from lesschanged.filesystem import StubFileSystem
from lesschanged.resolver import PathResolver


class TestPathResolver:
    @pytest.mark.asyncio
    async def test_base_directory_wins(self) -> None:
        fs = StubFileSystem({"/src/a.svg": "", "/lib/a.svg": ""})
        location = await PathResolver(fs).resolve("/src", "a.svg", ["/lib"])
        assert location == os.path.normpath("/src/a.svg")

    @pytest.mark.asyncio
    async def test_search_paths_in_order(self) -> None:
        fs = StubFileSystem({"/lib2/a.svg": "", "/lib3/a.svg": ""})
        location = await PathResolver(fs).resolve("/src", "a.svg", ["/lib1", "/lib2", "/lib3"])
        assert location == os.path.normpath("/lib2/a.svg")

    @pytest.mark.asyncio
    async def test_relative_segments_are_normalized(self) -> None:
        fs = StubFileSystem({"/shared/a.svg": ""})
        location = await PathResolver(fs).resolve("/src/sub", "../../shared/a.svg")
        assert location == os.path.normpath("/shared/a.svg")

    @pytest.mark.asyncio
    async def test_empty_base_directory(self) -> None:
        fs = StubFileSystem({"a.svg": ""})
        assert await PathResolver(fs).resolve("", "a.svg") == "a.svg"

    @pytest.mark.asyncio
    async def test_not_found_lists_tried_locations(self) -> None:
        fs = StubFileSystem()
        with pytest.raises(ImportNotFoundError) as exc_info:
            await PathResolver(fs).resolve("/src", "a.svg", ["/lib", "/src"])
        error = exc_info.value
        assert error.path == "a.svg"
        assert error.tried == (os.path.normpath("/src/a.svg"), os.path.normpath("/lib/a.svg"))
        assert "'a.svg' wasn't found" in str(error)

    @pytest.mark.asyncio
    async def test_duplicate_candidates_are_probed_once(self) -> None:
        fs = StubFileSystem()
        with pytest.raises(ImportNotFoundError):
            await PathResolver(fs).resolve("/src", "a.svg", ["/src", "/src/"])
        assert len(fs.stat_calls) == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_propagates(self) -> None:
        fs = StubFileSystem({"/lib/a.svg": ""})
        fs.fail("/src/a.svg", PermissionError("denied"))
        with pytest.raises(PermissionError):
            await PathResolver(fs).resolve("/src", "a.svg", ["/lib"])

    @pytest.mark.asyncio
    async def test_directory_is_not_a_match(self, tmp_path) -> None:
        (tmp_path / "src" / "a.svg").mkdir(parents=True)
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "a.svg").write_text("<svg/>")
        location = await PathResolver().resolve(
            str(tmp_path / "src"), "a.svg", [str(tmp_path / "lib")]
        )
        assert location == str(tmp_path / "lib" / "a.svg")
