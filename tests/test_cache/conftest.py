from __future__ import annotations

import pytest

from lesschanged.cache import CacheRepository, Database, run_migrations


@pytest.fixture
def db() -> Database:
    """Create a fresh in-memory database for each test."""
    database = Database(":memory:")
    database.connect()
    run_migrations(database)
    yield database
    database.close()


@pytest.fixture
def repo(db: Database) -> CacheRepository:
    return CacheRepository(db)
