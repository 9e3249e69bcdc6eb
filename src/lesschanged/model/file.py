"""StylesheetFile: a source file travelling through a build pipeline."""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable
from dataclasses import dataclass
from typing import Union

Chunk = Union[bytes, bytearray, str]
Contents = Union[Chunk, Iterable[Chunk], AsyncIterable[Chunk], None]


def _to_bytes(chunk: Chunk, encoding: str) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode(encoding)
    return bytes(chunk)


@dataclass
class StylesheetFile:
    """A stylesheet path plus its contents.

    Contents may be ``None`` (the file was never read), an in-memory buffer
    (``bytes`` or ``str``), or a sync/async iterable of chunks as produced by
    a streaming reader.
    """

    path: str | None = None
    contents: Contents = None

    @property
    def is_null(self) -> bool:
        return self.contents is None

    async def read_text(self, encoding: str = "utf-8") -> str:
        """Reassemble the contents into a single string.

        Chunks are joined as bytes before decoding, so a multi-byte
        character split across chunk boundaries decodes correctly.
        """
        contents = self.contents
        if contents is None:
            return ""
        if isinstance(contents, str):
            return contents
        if isinstance(contents, (bytes, bytearray)):
            return bytes(contents).decode(encoding)

        parts: list[bytes] = []
        if isinstance(contents, AsyncIterable):
            async for chunk in contents:
                parts.append(_to_bytes(chunk, encoding))
        else:
            for chunk in contents:
                parts.append(_to_bytes(chunk, encoding))
        return b"".join(parts).decode(encoding)
