"""Dependency and cache records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImportRecord:
    """A resolved dependency of a root stylesheet."""

    path: str


@dataclass(frozen=True)
class CacheEntry:
    """Modification evidence recorded for a root stylesheet.

    Attributes:
        root_path: The root stylesheet, as given to the cache.
        root_evidence: Evidence for the root file itself.
        dependency_evidence: Normalized dependency path -> evidence.
        recorded_at: ISO-8601 timestamp of the pass that produced the entry.
    """

    root_path: str
    root_evidence: str
    dependency_evidence: dict[str, str] = field(default_factory=dict)
    recorded_at: str = ""
