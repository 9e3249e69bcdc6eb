from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LessChangedConfig:
    db_path: str = ".lesschanged/cache.db"
    evidence: str = "mtime"  # "mtime" or "hash"
    paths: tuple[str, ...] = ()
    global_vars: dict[str, str] = field(default_factory=dict)
    modify_vars: dict[str, str] = field(default_factory=dict)

    def render_options(self) -> dict[str, Any]:
        """Options mapping for :class:`~lesschanged.resolver.ImportResolver`."""
        return {
            "paths": list(self.paths),
            "global_vars": dict(self.global_vars),
            "modify_vars": dict(self.modify_vars),
        }
