"""lesschanged: pass LESS files through a build only when they or their imports changed."""
from __future__ import annotations

__version__ = "0.1.0"

from lesschanged.errors import (
    ImportNotFoundError,
    ImportProcessingError,
    LessChangedError,
    MalformedReferenceError,
)
from lesschanged.model import CacheEntry, ImportRecord, StylesheetFile
from lesschanged.resolver import ImportResolver, PathResolver
from lesschanged.cache import ChangeDetectionCache
from lesschanged.config import LessChangedConfig
from lesschanged.runner import LessChangedRunner

__all__ = [
    "__version__",
    "CacheEntry",
    "ChangeDetectionCache",
    "ImportNotFoundError",
    "ImportProcessingError",
    "ImportRecord",
    "ImportResolver",
    "LessChangedConfig",
    "LessChangedError",
    "LessChangedRunner",
    "MalformedReferenceError",
    "PathResolver",
    "StylesheetFile",
]
