"""Stub filesystem for testing."""

from __future__ import annotations

import itertools
import os

from lesschanged.filesystem.types import FileStat

_clock = itertools.count(1_000_000_000)


def _key(path: str) -> str:
    return os.path.normpath(path)


class StubFileSystem:
    """In-memory filesystem with controllable modification times and faults.

    Paths are normalized with ``os.path.normpath`` so ``./a/b.less`` and
    ``a/b.less`` name the same file. ``fail(path, exc)`` makes every access
    to *path* raise *exc*, which is how tests simulate permission or
    hardware errors.
    """

    def __init__(self, files: dict[str, bytes | str] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        self._mtimes: dict[str, int] = {}
        self._faults: dict[str, Exception] = {}
        self.stat_calls: list[str] = []
        for path, content in (files or {}).items():
            self.write(path, content)

    # --- Mutation helpers ---

    def write(self, path: str, content: bytes | str = b"", mtime_ns: int | None = None) -> None:
        data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        key = _key(path)
        self._files[key] = data
        self._mtimes[key] = mtime_ns if mtime_ns is not None else next(_clock)

    def touch(self, path: str) -> None:
        """Advance a file's modification time without changing its content."""
        key = _key(path)
        if key not in self._files:
            raise FileNotFoundError(f"Stub file not found: {path}")
        self._mtimes[key] = next(_clock)

    def remove(self, path: str) -> None:
        key = _key(path)
        self._files.pop(key, None)
        self._mtimes.pop(key, None)

    def fail(self, path: str, exc: Exception) -> None:
        self._faults[_key(path)] = exc

    def exists(self, path: str) -> bool:
        return _key(path) in self._files

    # --- FileSystem protocol ---

    def _lookup(self, path: str) -> str:
        key = _key(path)
        if key in self._faults:
            raise self._faults[key]
        if key not in self._files:
            raise FileNotFoundError(f"Stub file not found: {path}")
        return key

    async def stat(self, path: str) -> FileStat:
        self.stat_calls.append(path)
        key = self._lookup(path)
        return FileStat(path=path, mtime_ns=self._mtimes[key], size=len(self._files[key]))

    async def read_bytes(self, path: str) -> bytes:
        return self._files[self._lookup(path)]

    async def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return self._files[self._lookup(path)].decode(encoding)
