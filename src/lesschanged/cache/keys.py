"""Cache keys derived from file paths."""

from __future__ import annotations

import hashlib
import os


def normalize_path(path: str) -> str:
    """Absolute, normalized, case-folded where the platform is case-insensitive."""
    return os.path.normcase(os.path.abspath(path))


def cache_key(path: str) -> str:
    """SHA-256 hex digest of the normalized path.

    ``a/../b.less``, ``./b.less`` and the absolute spelling all map to the
    same key.
    """
    return hashlib.sha256(normalize_path(path).encode("utf-8")).hexdigest()
