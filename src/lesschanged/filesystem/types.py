"""Filesystem capability types and protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class FileStat:
    """The subset of ``os.stat`` results the resolver and cache rely on."""

    path: str
    mtime_ns: int
    size: int = 0
    is_file: bool = True


class FileSystem(Protocol):
    """Protocol for the filesystem the resolver and cache read from.

    ``stat`` raises ``FileNotFoundError`` for missing paths; any other
    ``OSError`` signals an unexpected I/O fault.
    """

    async def stat(self, path: str) -> FileStat: ...
    async def read_bytes(self, path: str) -> bytes: ...
    async def read_text(self, path: str, encoding: str = "utf-8") -> str: ...
