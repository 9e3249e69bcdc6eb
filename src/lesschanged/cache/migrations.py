from __future__ import annotations

from lesschanged.cache.db import Database

SCHEMA = """
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    root_path TEXT NOT NULL,
    root_evidence TEXT NOT NULL,
    recorded_at TEXT NOT NULL DEFAULT ''
);

CREATE TABLE IF NOT EXISTS dependency_evidence (
    entry_key TEXT NOT NULL,
    path TEXT NOT NULL,
    evidence TEXT NOT NULL,
    PRIMARY KEY (entry_key, path),
    FOREIGN KEY (entry_key) REFERENCES cache_entries(key) ON DELETE CASCADE
);
"""


def run_migrations(db: Database) -> None:
    """Create all tables."""
    db.executescript(SCHEMA)
    db.commit()
