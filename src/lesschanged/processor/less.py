"""Default stylesheet processor: expands LESS ``@import`` directives.

This is not a LESS compiler. It follows the compiler's import semantics
closely enough to list every file a stylesheet pulls in, and lets plugins
observe every function call in every parsed file.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from lesschanged.errors import ImportNotFoundError, StylesheetProcessorError
from lesschanged.filesystem import FileSystem, LocalFileSystem
from lesschanged.parser import ImportDirective, VariableValue, scan_stylesheet
from lesschanged.processor.base import FileInfo, PluginManager, RenderResult
from lesschanged.resolver.path_resolver import PathResolver

_INTERPOLATION_RE = re.compile(r"@\{([\w-]+)\}")
_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]+$")
_REMOTE_RE = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.-]*:)?//")


def _plain(value: object) -> str:
    """Render a global/modify variable value as interpolation text."""
    text = str(value).strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def _variables(options: Mapping[str, Any], name: str, alias: str) -> dict[str, Any]:
    return {**(options.get(alias) or {}), **(options.get(name) or {})}


@dataclass
class _RenderState:
    """Mutable bookkeeping for a single render call."""

    paths: list[str]
    manager: PluginManager
    global_vars: dict[str, Any]
    modify_vars: dict[str, Any]
    declared: dict[str, VariableValue] = field(default_factory=dict)
    seen: set[str] = field(default_factory=set)
    imports: list[str] = field(default_factory=list)


class LessProcessor:
    """Walks a stylesheet and its imports, reporting every imported file.

    Recognized options: ``filename``, ``paths``, ``plugins``,
    ``global_vars`` and ``modify_vars``. The less.js spellings
    ``globalVars`` and ``modifyVars`` are accepted too; when both are given
    the snake_case entry wins per variable. Anything else is ignored.
    """

    def __init__(
        self,
        path_resolver: PathResolver | None = None,
        filesystem: FileSystem | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._fs = filesystem or LocalFileSystem()
        self._resolver = path_resolver or PathResolver(self._fs)
        self._log = logger or logging.getLogger("lesschanged")

    async def render(self, text: str, options: Mapping[str, Any]) -> RenderResult:
        filename = str(options.get("filename") or "")
        manager = PluginManager()
        for plugin in options.get("plugins") or ():
            install = getattr(plugin, "install", None)
            if not callable(install):
                raise StylesheetProcessorError(
                    f"Plugin {plugin!r} has no install() method", filename
                )
            install(manager)

        state = _RenderState(
            paths=list(options.get("paths") or ()),
            manager=manager,
            global_vars=_variables(options, "global_vars", "globalVars"),
            modify_vars=_variables(options, "modify_vars", "modifyVars"),
        )
        if filename:
            state.seen.add(os.path.normpath(filename))
        await self._expand(text, filename, False, state)
        return RenderResult(imports=list(state.imports))

    async def _expand(self, source: str, filename: str, reference: bool, state: _RenderState) -> None:
        self._log.debug("Scanning '%s' for imports", filename or "<input>")
        parsed = scan_stylesheet(source, filename or None)
        state.declared.update(parsed.variables)

        info = FileInfo(
            filename=filename,
            current_directory=os.path.dirname(filename),
            reference=reference,
        )
        for call in parsed.calls:
            state.manager.visit_call(call, info)
        for directive in parsed.imports:
            await self._import(directive, info, state)

    async def _import(self, directive: ImportDirective, info: FileInfo, state: _RenderState) -> None:
        options = directive.options
        path = self._interpolate(directive.path, info.filename, state, ())

        if self._is_css_import(path, options):
            self._log.debug("Leaving CSS import '%s' to the browser", path)
            return
        if not _EXTENSION_RE.search(os.path.basename(path)):
            path += ".less"

        try:
            resolved = await self._resolver.resolve(info.current_directory, path, state.paths)
        except ImportNotFoundError as exc:
            if "optional" in options:
                self._log.debug("Skipping optional import '%s'", path)
                return
            raise StylesheetProcessorError(
                f"{exc} (imported from '{info.filename or '<input>'}')",
                info.filename,
                cause=exc,
            ) from exc

        # Each file is reported and parsed once; this also breaks import cycles.
        if resolved in state.seen:
            return
        state.seen.add(resolved)
        state.imports.append(resolved)

        if "inline" in options:
            return
        source = await self._fs.read_text(resolved)
        await self._expand(source, resolved, info.reference or "reference" in options, state)

    @staticmethod
    def _is_css_import(path: str, options: frozenset[str]) -> bool:
        if "css" in options:
            return True
        if _REMOTE_RE.match(path):
            return True
        if "less" in options or "inline" in options:
            return False
        return path.split("?", 1)[0].lower().endswith(".css")

    def _interpolate(
        self, text: str, filename: str, state: _RenderState, resolving: tuple[str, ...]
    ) -> str:
        def replace(match: re.Match[str]) -> str:
            return self._lookup(match.group(1), filename, state, resolving)

        return _INTERPOLATION_RE.sub(replace, text)

    def _lookup(
        self, name: str, filename: str, state: _RenderState, resolving: tuple[str, ...]
    ) -> str:
        if name in resolving:
            raise StylesheetProcessorError(
                f"Recursive variable definition for @{name}", filename
            )
        resolving = (*resolving, name)

        if name in state.modify_vars:
            return _plain(state.modify_vars[name])
        value = state.declared.get(name)
        if value is not None:
            if value.reference is not None:
                return self._lookup(value.reference, filename, state, resolving)
            return self._interpolate(value.text, filename, state, resolving)
        if name in state.global_vars:
            return _plain(state.global_vars[name])
        raise StylesheetProcessorError(f"variable @{name} is undefined", filename)
