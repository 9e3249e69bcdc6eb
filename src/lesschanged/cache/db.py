from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from lesschanged.errors import CacheError


class Database:
    """SQLite connection for the change-detection cache.

    WAL mode lets several build processes read and record against the same
    file at once.
    """

    def __init__(self, path: str = ":memory:") -> None:
        self._path = path
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        """Open the cache, creating the parent directory of a file database."""
        if self._path != ":memory:":
            Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._conn = sqlite3.connect(self._path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA foreign_keys=ON")
        except sqlite3.DatabaseError as exc:
            self.close()
            raise CacheError(f"Cannot open cache database '{self._path}': {exc}", cause=exc) from exc

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def _require(self) -> sqlite3.Connection:
        assert self._conn is not None, "Database not connected"
        return self._conn

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        return self._require().execute(sql, params)

    def executemany(self, sql: str, rows: list[tuple]) -> sqlite3.Cursor:
        return self._require().executemany(sql, rows)

    def executescript(self, script: str) -> None:
        self._require().executescript(script)

    def fetch_one(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        return self.execute(sql, params).fetchone()

    def fetch_all(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    def commit(self) -> None:
        self._require().commit()

    @contextmanager
    def transaction(self) -> Iterator[Database]:
        """Commit the statements run inside the block, or roll all of them back."""
        conn = self._require()
        try:
            yield self
        except BaseException:
            conn.rollback()
            raise
        conn.commit()
