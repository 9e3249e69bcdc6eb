from __future__ import annotations

import sqlite3

from lesschanged.cache.db import Database
from lesschanged.cache.keys import cache_key, normalize_path
from lesschanged.model import CacheEntry


class CacheRepository:
    """Repository for CacheEntry persistence."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def get(self, root_path: str) -> CacheEntry | None:
        """Retrieve the entry for a root stylesheet, or None if never recorded."""
        key = cache_key(root_path)
        row = self._db.fetch_one("SELECT * FROM cache_entries WHERE key = ?", (key,))
        if row is None:
            return None
        deps = self._db.fetch_all(
            "SELECT path, evidence FROM dependency_evidence WHERE entry_key = ?",
            (key,),
        )
        return _row_to_entry(row, deps)

    def replace(self, entry: CacheEntry) -> None:
        """Store *entry*, discarding everything previously recorded for its root."""
        key = cache_key(entry.root_path)
        with self._db.transaction() as db:
            db.execute("DELETE FROM dependency_evidence WHERE entry_key = ?", (key,))
            db.execute(
                """INSERT OR REPLACE INTO cache_entries (key, root_path, root_evidence, recorded_at)
                   VALUES (?, ?, ?, ?)""",
                (
                    key,
                    normalize_path(entry.root_path),
                    entry.root_evidence,
                    entry.recorded_at,
                ),
            )
            db.executemany(
                "INSERT INTO dependency_evidence (entry_key, path, evidence) VALUES (?, ?, ?)",
                [
                    (key, normalize_path(path), evidence)
                    for path, evidence in entry.dependency_evidence.items()
                ],
            )

    def delete(self, root_path: str) -> bool:
        """Remove the entry for a root stylesheet. Returns True if one existed."""
        cursor = self._db.execute(
            "DELETE FROM cache_entries WHERE key = ?", (cache_key(root_path),)
        )
        self._db.commit()
        return cursor.rowcount > 0

    def clear(self) -> int:
        """Remove every entry. Returns the number removed."""
        cursor = self._db.execute("DELETE FROM cache_entries")
        self._db.commit()
        return cursor.rowcount

    def list_roots(self) -> tuple[str, ...]:
        """List the root paths that have an entry."""
        rows = self._db.fetch_all("SELECT root_path FROM cache_entries ORDER BY root_path")
        return tuple(r["root_path"] for r in rows)

    def count(self) -> int:
        """Return the total number of entries."""
        row = self._db.fetch_one("SELECT COUNT(*) as cnt FROM cache_entries")
        assert row is not None
        return row["cnt"]


# ---------------------------------------------------------------------------
# Row mapping
# ---------------------------------------------------------------------------


def _row_to_entry(row: sqlite3.Row, deps: list[sqlite3.Row]) -> CacheEntry:
    return CacheEntry(
        root_path=row["root_path"],
        root_evidence=row["root_evidence"],
        dependency_evidence={d["path"]: d["evidence"] for d in deps},
        recorded_at=row["recorded_at"],
    )
