"""List every file a stylesheet depends on.

Conventional ``@import`` directives are expanded by the stylesheet processor.
Files pulled in through ``data-uri()`` are invisible to it, so a plugin
collects those calls while the processor walks the sources, and they are
resolved afterwards.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lesschanged.errors import ImportProcessingError, MalformedReferenceError
from lesschanged.filesystem import FileSystem, LocalFileSystem
from lesschanged.model import ImportRecord, StylesheetFile
from lesschanged.parser import FunctionCall, QuotedArgument
from lesschanged.processor import FileInfo, LessProcessor, PluginManager, StylesheetProcessor
from lesschanged.resolver.path_resolver import PathResolver

EMBEDDED_RESOURCE_FUNCTIONS = frozenset({"data-uri"})


@dataclass(frozen=True)
class EmbeddedResource:
    """A literal ``data-uri()`` path and the directory it is relative to."""

    path: str
    current_directory: str


class EmbeddedResourceCollector:
    """Processor plugin that records literal ``data-uri()`` references.

    ``data-uri(path)`` and ``data-uri(mimetype, path)`` are accepted. Calls
    with any other arity raise :class:`MalformedReferenceError`. A path that
    is a variable, an interpolated string or any other expression cannot be
    resolved statically and is skipped.
    """

    def __init__(self) -> None:
        self.resources: list[EmbeddedResource] = []

    def install(self, manager: PluginManager) -> None:
        manager.add_visitor(self)

    def visit_call(self, call: FunctionCall, file_info: FileInfo) -> None:
        if call.name not in EMBEDDED_RESOURCE_FUNCTIONS:
            return
        if len(call.arguments) not in (1, 2):
            raise MalformedReferenceError(
                f"{call.name}() expects a path and an optional MIME type, "
                f"got {len(call.arguments)} argument(s)",
                file_info.filename,
                call.line,
                call.column,
            )
        argument = call.arguments[-1]
        if not isinstance(argument, QuotedArgument) or not argument.is_literal:
            return
        # Fragments select an element inside an SVG; they are not part of the file name.
        path = argument.value.split("#", 1)[0]
        if not path:
            raise MalformedReferenceError(
                f"{call.name}() was given an empty path",
                file_info.filename,
                call.line,
                call.column,
            )
        self.resources.append(EmbeddedResource(path, file_info.current_directory))


class ImportResolver:
    """Enumerates the transitive file dependencies of a root stylesheet.

    ``options`` is copied on construction and copied again for every render,
    so neither the caller's mapping nor its ``paths``/``plugins`` lists are
    ever mutated.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        processor: StylesheetProcessor | None = None,
        path_resolver: PathResolver | None = None,
        filesystem: FileSystem | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._options: dict[str, Any] = dict(options or {})
        self._paths: list[str] = list(self._options.get("paths") or ())
        self._plugins: list[Any] = list(self._options.get("plugins") or ())
        self._fs = filesystem or LocalFileSystem()
        self._log = logger or logging.getLogger("lesschanged")
        self._path_resolver = path_resolver or PathResolver(self._fs)
        self._processor = processor or LessProcessor(
            path_resolver=self._path_resolver, filesystem=self._fs, logger=self._log
        )

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    def _render_options(self, filename: str, collector: EmbeddedResourceCollector) -> dict[str, Any]:
        options = dict(self._options)
        options["filename"] = filename
        options["paths"] = list(self._paths)
        options["plugins"] = [*self._plugins, collector]
        return options

    async def list_imports(self, file: StylesheetFile | None) -> list[ImportRecord]:
        """Return the resolved dependencies of *file*.

        Conventional imports come first, embedded resources after. Raises
        :class:`ImportProcessingError` when the file cannot be processed;
        no partial list is ever returned.
        """
        if file is None or file.is_null:
            return []

        root = file.path or ""
        collector = EmbeddedResourceCollector()
        try:
            text = await file.read_text()
            result = await self._processor.render(text, self._render_options(root, collector))
        except Exception as exc:
            raise ImportProcessingError(root, cause=exc) from exc

        records = [ImportRecord(path) for path in result.imports]
        seen = {record.path for record in records}
        for resource in collector.resources:
            location = await self._resolve_resource(root, resource)
            if location is not None and location not in seen:
                seen.add(location)
                records.append(ImportRecord(location))
        return records

    async def _resolve_resource(self, root: str, resource: EmbeddedResource) -> str | None:
        base = "" if os.path.isabs(resource.path) else resource.current_directory
        try:
            location = await self._path_resolver.resolve(base, resource.path, list(self._paths))
        except Exception as exc:
            raise ImportProcessingError(root, cause=exc) from exc

        try:
            await self._fs.stat(location)
        except FileNotFoundError:
            self._log.error("Import '%s' not found.", location)
            return None
        return location
