"""Locate a referenced file relative to a base directory or search paths."""

from __future__ import annotations

import os
from collections.abc import Sequence

from lesschanged.errors import ImportNotFoundError
from lesschanged.filesystem import FileSystem, LocalFileSystem


class PathResolver:
    """Resolves literal file references the way the LESS file manager does.

    Candidates are tried in order: ``base_directory`` first, then each search
    path. The first candidate that exists as a regular file wins.
    """

    def __init__(self, filesystem: FileSystem | None = None) -> None:
        self._fs = filesystem or LocalFileSystem()

    async def resolve(
        self,
        base_directory: str,
        candidate: str,
        search_paths: Sequence[str] | None = None,
    ) -> str:
        """Return the first existing location of *candidate*.

        Raises :class:`ImportNotFoundError` when no candidate exists. Any
        other ``OSError`` raised while probing propagates unchanged.
        """
        tried: list[str] = []
        for directory in [base_directory, *(search_paths or ())]:
            location = os.path.normpath(os.path.join(directory, candidate))
            if location in tried:
                continue
            tried.append(location)
            try:
                stat = await self._fs.stat(location)
            except (FileNotFoundError, NotADirectoryError):
                continue
            if stat.is_file:
                return location
        raise ImportNotFoundError(candidate, tried)
