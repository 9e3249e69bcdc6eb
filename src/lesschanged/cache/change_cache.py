"""Decide whether a root stylesheet needs rebuilding.

Evidence for the root file and every dependency is recorded after a build
pass succeeds. The next ``check`` compares fresh evidence against it; every
doubt (unreadable files, deleted dependencies, I/O faults) resolves to
"changed" so a stale output is never kept.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone

from lesschanged.cache.evidence import EvidenceProbe, MtimeEvidence
from lesschanged.cache.keys import normalize_path
from lesschanged.cache.repository import CacheRepository
from lesschanged.errors import ImportProcessingError
from lesschanged.filesystem import FileSystem, LocalFileSystem
from lesschanged.model import CacheEntry, ImportRecord, StylesheetFile
from lesschanged.resolver import ImportResolver


def _caused_by_io(exc: BaseException) -> bool:
    cause = exc.__cause__
    while cause is not None:
        if isinstance(cause, OSError):
            return True
        cause = cause.__cause__
    return False


class ChangeDetectionCache:
    """Persistent per-file change detection for stylesheets and their imports."""

    def __init__(
        self,
        repository: CacheRepository,
        resolver: ImportResolver,
        *,
        filesystem: FileSystem | None = None,
        evidence: EvidenceProbe | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._repo = repository
        self._resolver = resolver
        self._fs = filesystem or LocalFileSystem()
        self._evidence = evidence or MtimeEvidence(self._fs)
        self._log = logger or logging.getLogger("lesschanged")

    async def check(self, root_path: str) -> bool:
        """Return True if *root_path* or any of its dependencies changed.

        Raises :class:`ImportProcessingError` only when the stylesheet cannot
        be processed for reasons unrelated to missing files or I/O faults.
        """
        entry = self._repo.get(root_path)
        if entry is None:
            self._log.debug("No cache entry for '%s'", root_path)
            return True

        try:
            root_evidence = await self._evidence.read(root_path)
        except OSError as exc:
            self._log.warning("Cannot read '%s' (%s); treating it as changed", root_path, exc)
            return True
        if root_evidence != entry.root_evidence:
            self._log.debug("'%s' changed", root_path)
            return True

        try:
            imports = await self._list_imports(root_path)
        except OSError as exc:
            self._log.warning(
                "I/O error listing imports of '%s' (%s); treating it as changed", root_path, exc
            )
            return True
        except ImportProcessingError as exc:
            if _caused_by_io(exc) or await self._lost_dependency(entry.dependency_evidence):
                self._log.warning("%s; treating it as changed", exc)
                return True
            raise

        current: set[str] = set()
        for record in imports:
            key = normalize_path(record.path)
            current.add(key)
            stored = entry.dependency_evidence.get(key)
            if stored is None:
                self._log.debug("'%s' gained dependency '%s'", root_path, record.path)
                return True
            try:
                evidence = await self._evidence.read(record.path)
            except FileNotFoundError:
                self._log.debug("Dependency '%s' of '%s' was deleted", record.path, root_path)
                return True
            except OSError as exc:
                self._log.warning(
                    "Cannot read dependency '%s' (%s); treating '%s' as changed",
                    record.path,
                    exc,
                    root_path,
                )
                return True
            if evidence != stored:
                self._log.debug("Dependency '%s' of '%s' changed", record.path, root_path)
                return True

        # A dependency that is no longer listed only counts once it is gone from disk.
        dropped = {k: v for k, v in entry.dependency_evidence.items() if k not in current}
        if await self._lost_dependency(dropped):
            return True

        self._log.debug("'%s' and its %d dependencies are unchanged", root_path, len(imports))
        return False

    async def collect(self, root_path: str) -> CacheEntry:
        """Read fresh evidence for *root_path* and its current dependencies."""
        root_evidence = await self._evidence.read(root_path)
        dependency_evidence: dict[str, str] = {}
        for record in await self._list_imports(root_path):
            dependency_evidence[normalize_path(record.path)] = await self._evidence.read(record.path)
        return CacheEntry(
            root_path=root_path,
            root_evidence=root_evidence,
            dependency_evidence=dependency_evidence,
        )

    async def record(
        self,
        root_path: str,
        root_evidence: str,
        dependency_evidence: Mapping[str, str],
    ) -> None:
        """Replace the stored entry for *root_path*.

        Call only after the file went downstream and was built successfully.
        """
        entry = CacheEntry(
            root_path=root_path,
            root_evidence=root_evidence,
            dependency_evidence=dict(dependency_evidence),
            recorded_at=datetime.now(timezone.utc).isoformat(),
        )
        self._repo.replace(entry)
        self._log.debug(
            "Recorded '%s' with %d dependencies", root_path, len(entry.dependency_evidence)
        )

    async def refresh(self, root_path: str) -> CacheEntry:
        """Collect fresh evidence and record it in one step."""
        entry = await self.collect(root_path)
        await self.record(entry.root_path, entry.root_evidence, entry.dependency_evidence)
        return entry

    async def forget(self, root_path: str) -> bool:
        """Drop the entry for *root_path* so the next check reports a change."""
        return self._repo.delete(root_path)

    async def _list_imports(self, root_path: str) -> list[ImportRecord]:
        contents = await self._fs.read_bytes(root_path)
        return await self._resolver.list_imports(StylesheetFile(path=root_path, contents=contents))

    async def _lost_dependency(self, dependency_evidence: Mapping[str, str]) -> bool:
        for path in dependency_evidence:
            try:
                await self._fs.stat(path)
            except FileNotFoundError:
                self._log.debug("Recorded dependency '%s' no longer exists", path)
                return True
            except OSError:
                continue
        return False
