from lesschanged.resolver.path_resolver import PathResolver
from lesschanged.resolver.import_resolver import (
    EmbeddedResource,
    EmbeddedResourceCollector,
    ImportResolver,
)

__all__ = [
    "PathResolver",
    "ImportResolver",
    "EmbeddedResource",
    "EmbeddedResourceCollector",
]
