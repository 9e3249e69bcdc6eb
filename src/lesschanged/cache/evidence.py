"""Evidence probes: comparable per-file state used to spot changes."""

from __future__ import annotations

import hashlib
from typing import Protocol

from lesschanged.filesystem import FileSystem


class EvidenceProbe(Protocol):
    """Reads the current evidence for a path.

    Raises ``FileNotFoundError`` for a missing file and any other ``OSError``
    for I/O faults.
    """

    kind: str

    async def read(self, path: str) -> str: ...


class MtimeEvidence:
    """Nanosecond modification time."""

    kind = "mtime"

    def __init__(self, filesystem: FileSystem) -> None:
        self._fs = filesystem

    async def read(self, path: str) -> str:
        stat = await self._fs.stat(path)
        return str(stat.mtime_ns)


class ContentHashEvidence:
    """SHA-256 of the file contents; immune to touch-without-edit."""

    kind = "hash"

    def __init__(self, filesystem: FileSystem) -> None:
        self._fs = filesystem

    async def read(self, path: str) -> str:
        data = await self._fs.read_bytes(path)
        return hashlib.sha256(data).hexdigest()


EVIDENCE_KINDS: dict[str, type[MtimeEvidence] | type[ContentHashEvidence]] = {
    "mtime": MtimeEvidence,
    "hash": ContentHashEvidence,
}


def make_evidence(kind: str, filesystem: FileSystem) -> EvidenceProbe:
    """Build the probe registered under *kind*."""
    try:
        probe_class = EVIDENCE_KINDS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown evidence kind {kind!r}; expected one of {sorted(EVIDENCE_KINDS)}"
        ) from None
    return probe_class(filesystem)
