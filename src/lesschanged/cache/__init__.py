from __future__ import annotations

from lesschanged.cache.change_cache import ChangeDetectionCache
from lesschanged.cache.db import Database
from lesschanged.cache.evidence import (
    ContentHashEvidence,
    EvidenceProbe,
    MtimeEvidence,
    make_evidence,
)
from lesschanged.cache.keys import cache_key, normalize_path
from lesschanged.cache.migrations import run_migrations
from lesschanged.cache.repository import CacheRepository

__all__ = [
    "ChangeDetectionCache",
    "CacheRepository",
    "Database",
    "run_migrations",
    "EvidenceProbe",
    "MtimeEvidence",
    "ContentHashEvidence",
    "make_evidence",
    "cache_key",
    "normalize_path",
]
