from __future__ import annotations

import os
import sqlite3

import pytest

from lesschanged.cache import CacheRepository, Database, cache_key, normalize_path, run_migrations
from lesschanged.errors import CacheError
from lesschanged.model import CacheEntry

INSERT_ENTRY = "INSERT INTO cache_entries (key, root_path, root_evidence) VALUES (?, ?, ?)"


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


class TestDatabase:
    def test_connect_creates_parent_directory(self, tmp_path) -> None:
        path = tmp_path / ".lesschanged" / "cache.db"
        database = Database(str(path))
        database.connect()
        assert path.parent.is_dir()
        row = database.fetch_one("PRAGMA journal_mode")
        assert row is not None
        assert row[0] == "wal"
        database.close()

    def test_foreign_keys_enabled(self, db: Database) -> None:
        row = db.fetch_one("PRAGMA foreign_keys")
        assert row is not None
        assert row[0] == 1

    def test_corrupt_file_raises_cache_error(self, tmp_path) -> None:
        path = tmp_path / "cache.db"
        path.write_bytes(b"this is not a sqlite database" * 100)
        database = Database(str(path))
        with pytest.raises(CacheError, match="Cannot open cache database"):
            database.connect()

    def test_close_is_idempotent(self) -> None:
        database = Database()
        database.connect()
        database.close()
        database.close()

    def test_transaction_commits(self, db: Database) -> None:
        with db.transaction():
            db.execute(INSERT_ENTRY, ("k", "/a", "1"))
        assert db.fetch_one("SELECT key FROM cache_entries WHERE key = 'k'") is not None

    def test_transaction_rolls_back_on_any_exception(self, db: Database) -> None:
        with pytest.raises(RuntimeError, match="interrupted"):
            with db.transaction():
                db.execute(INSERT_ENTRY, ("k", "/a", "1"))
                raise RuntimeError("interrupted")
        assert db.fetch_one("SELECT key FROM cache_entries WHERE key = 'k'") is None


class TestMigrations:
    def test_creates_tables(self, db: Database) -> None:
        rows = db.fetch_all("SELECT name FROM sqlite_master WHERE type='table'")
        assert {"cache_entries", "dependency_evidence"} <= {r["name"] for r in rows}

    def test_idempotent(self, db: Database) -> None:
        run_migrations(db)


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------


class TestKeys:
    def test_equivalent_spellings_share_a_key(self) -> None:
        absolute = os.path.join(os.getcwd(), "styles", "main.less")
        assert cache_key("styles/main.less") == cache_key("./styles/../styles/main.less")
        assert cache_key("styles/main.less") == cache_key(absolute)

    def test_different_files_differ(self) -> None:
        assert cache_key("a.less") != cache_key("b.less")

    def test_key_is_hex_digest(self) -> None:
        key = cache_key("a.less")
        assert len(key) == 64
        int(key, 16)

    def test_normalize_path_is_absolute(self) -> None:
        assert os.path.isabs(normalize_path("a.less"))


# ---------------------------------------------------------------------------
# CacheRepository
# ---------------------------------------------------------------------------


class TestCacheRepository:
    def test_get_missing(self, repo: CacheRepository) -> None:
        assert repo.get("/src/main.less") is None

    def test_replace_and_get(self, repo: CacheRepository) -> None:
        entry = CacheEntry(
            root_path="/src/main.less",
            root_evidence="100",
            dependency_evidence={"/src/a.less": "200", "/src/icon.svg": "300"},
            recorded_at="2024-01-01T00:00:00+00:00",
        )
        repo.replace(entry)
        loaded = repo.get("/src/main.less")
        assert loaded is not None
        assert loaded.root_evidence == "100"
        assert loaded.dependency_evidence == {
            normalize_path("/src/a.less"): "200",
            normalize_path("/src/icon.svg"): "300",
        }
        assert loaded.recorded_at == "2024-01-01T00:00:00+00:00"

    def test_replace_discards_old_dependencies(self, repo: CacheRepository) -> None:
        repo.replace(CacheEntry("/src/main.less", "1", {"/src/a.less": "1", "/src/b.less": "1"}))
        repo.replace(CacheEntry("/src/main.less", "2", {"/src/c.less": "2"}))
        loaded = repo.get("/src/main.less")
        assert loaded is not None
        assert loaded.root_evidence == "2"
        assert loaded.dependency_evidence == {normalize_path("/src/c.less"): "2"}
        assert repo.count() == 1

    def test_lookup_by_equivalent_path(self, repo: CacheRepository) -> None:
        repo.replace(CacheEntry("/src/main.less", "1"))
        assert repo.get("/src/lib/../main.less") is not None

    def test_entries_are_independent(self, repo: CacheRepository) -> None:
        repo.replace(CacheEntry("/src/a.less", "1", {"/src/shared.less": "1"}))
        repo.replace(CacheEntry("/src/b.less", "2", {"/src/shared.less": "2"}))
        a = repo.get("/src/a.less")
        b = repo.get("/src/b.less")
        assert a is not None and b is not None
        assert a.dependency_evidence == {normalize_path("/src/shared.less"): "1"}
        assert b.dependency_evidence == {normalize_path("/src/shared.less"): "2"}

    def test_delete(self, repo: CacheRepository, db: Database) -> None:
        repo.replace(CacheEntry("/src/main.less", "1", {"/src/a.less": "1"}))
        assert repo.delete("/src/main.less")
        assert repo.get("/src/main.less") is None
        row = db.fetch_one("SELECT COUNT(*) AS cnt FROM dependency_evidence")
        assert row is not None
        assert row["cnt"] == 0

    def test_delete_missing(self, repo: CacheRepository) -> None:
        assert not repo.delete("/src/main.less")

    def test_clear(self, repo: CacheRepository) -> None:
        repo.replace(CacheEntry("/src/a.less", "1"))
        repo.replace(CacheEntry("/src/b.less", "1"))
        assert repo.clear() == 2
        assert repo.count() == 0

    def test_list_roots(self, repo: CacheRepository) -> None:
        repo.replace(CacheEntry("/src/b.less", "1"))
        repo.replace(CacheEntry("/src/a.less", "1"))
        assert repo.list_roots() == (normalize_path("/src/a.less"), normalize_path("/src/b.less"))

    def test_failed_replace_keeps_previous_entry(self, repo: CacheRepository, db: Database) -> None:
        repo.replace(CacheEntry("/src/main.less", "1", {"/src/a.less": "1"}))
        db.execute("DROP TABLE dependency_evidence")
        db.execute(
            "CREATE TABLE dependency_evidence (entry_key TEXT, path TEXT, evidence TEXT NOT NULL)"
        )
        db.commit()
        with pytest.raises(sqlite3.IntegrityError):
            repo.replace(CacheEntry("/src/main.less", "2", {"/src/a.less": None}))  # type: ignore[dict-item]
        loaded = repo.get("/src/main.less")
        assert loaded is not None
        assert loaded.root_evidence == "1"
