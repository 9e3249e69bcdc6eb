"""Local filesystem: blocking os calls pushed off the event loop."""

from __future__ import annotations

import asyncio
import os
import stat as stat_module
from pathlib import Path

from lesschanged.filesystem.types import FileStat


class LocalFileSystem:
    """Reads the real filesystem.

    Every call runs in the default executor via ``asyncio.to_thread`` so
    that a slow disk never stalls the event loop driving the pipeline.
    """

    async def stat(self, path: str) -> FileStat:
        result = await asyncio.to_thread(os.stat, path)
        return FileStat(
            path=path,
            mtime_ns=result.st_mtime_ns,
            size=result.st_size,
            is_file=stat_module.S_ISREG(result.st_mode),
        )

    async def read_bytes(self, path: str) -> bytes:
        return await asyncio.to_thread(Path(path).read_bytes)

    async def read_text(self, path: str, encoding: str = "utf-8") -> str:
        return await asyncio.to_thread(Path(path).read_text, encoding)
