"""Stylesheet processor protocol, render result, and plugin plumbing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from lesschanged.parser.nodes import FunctionCall


@dataclass(frozen=True)
class RenderResult:
    """What a processor reports back: the files it imported."""

    imports: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FileInfo:
    """Where a visited node lives."""

    filename: str
    current_directory: str
    reference: bool = False


class CallVisitor(Protocol):
    def visit_call(self, call: FunctionCall, file_info: FileInfo) -> None: ...


class Plugin(Protocol):
    def install(self, manager: PluginManager) -> None: ...


class PluginManager:
    """Collects visitors registered by plugins for one render."""

    def __init__(self) -> None:
        self._visitors: list[CallVisitor] = []

    def add_visitor(self, visitor: CallVisitor) -> None:
        self._visitors.append(visitor)

    @property
    def visitors(self) -> list[CallVisitor]:
        return list(self._visitors)

    def visit_call(self, call: FunctionCall, file_info: FileInfo) -> None:
        """Dispatch a function call to every visitor in registration order."""
        for visitor in self._visitors:
            visitor.visit_call(call, file_info)


class StylesheetProcessor(Protocol):
    """Protocol for the component that expands conventional imports.

    ``options`` carries at least ``filename``, ``paths`` and ``plugins``;
    other keys are processor specific. Implementations raise when a
    non-optional import cannot be located.
    """

    async def render(self, text: str, options: Mapping[str, Any]) -> RenderResult: ...
