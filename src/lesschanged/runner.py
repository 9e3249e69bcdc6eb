from __future__ import annotations

import logging
from collections.abc import Iterable

from lesschanged.cache import (
    CacheRepository,
    ChangeDetectionCache,
    Database,
    make_evidence,
    run_migrations,
)
from lesschanged.config import LessChangedConfig
from lesschanged.filesystem import FileSystem, LocalFileSystem
from lesschanged.model import CacheEntry
from lesschanged.resolver import ImportResolver


class LessChangedRunner:
    """Wires the database, import resolver and change-detection cache."""

    def __init__(
        self,
        config: LessChangedConfig,
        *,
        filesystem: FileSystem | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self._fs = filesystem or LocalFileSystem()
        self._log = logger or logging.getLogger("lesschanged")
        self._db: Database | None = None
        self._repo: CacheRepository | None = None
        self._resolver: ImportResolver | None = None
        self._cache: ChangeDetectionCache | None = None

    def initialize(self) -> None:
        """Open the database, create tables, and build the components."""
        self._db = Database(self.config.db_path)
        self._db.connect()
        run_migrations(self._db)
        self._repo = CacheRepository(self._db)
        self._resolver = ImportResolver(
            self.config.render_options(), filesystem=self._fs, logger=self._log
        )
        self._cache = ChangeDetectionCache(
            self._repo,
            self._resolver,
            filesystem=self._fs,
            evidence=make_evidence(self.config.evidence, self._fs),
            logger=self._log,
        )

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None

    def __enter__(self) -> LessChangedRunner:
        self.initialize()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def resolver(self) -> ImportResolver:
        assert self._resolver is not None, "Runner not initialized"
        return self._resolver

    @property
    def cache(self) -> ChangeDetectionCache:
        assert self._cache is not None, "Runner not initialized"
        return self._cache

    @property
    def repository(self) -> CacheRepository:
        assert self._repo is not None, "Runner not initialized"
        return self._repo

    async def changed_files(self, paths: Iterable[str], *, record: bool = False) -> list[str]:
        """Return the paths whose stylesheet or dependencies changed.

        With ``record=True`` fresh evidence is stored for each changed file,
        for callers that build the returned files straight away.
        """
        changed: list[str] = []
        for path in paths:
            if not await self.cache.check(path):
                self._log.debug("Skipping unchanged '%s'", path)
                continue
            changed.append(path)
            if record:
                entry: CacheEntry = await self.cache.refresh(path)
                self._log.info(
                    "Recorded '%s' (%d dependencies)", path, len(entry.dependency_evidence)
                )
        return changed
