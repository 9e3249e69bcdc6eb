"""Stylesheet processors: expand conventional imports and visit calls."""

from lesschanged.processor.base import (
    CallVisitor,
    FileInfo,
    Plugin,
    PluginManager,
    RenderResult,
    StylesheetProcessor,
)
from lesschanged.processor.less import LessProcessor

__all__ = [
    "CallVisitor",
    "FileInfo",
    "LessProcessor",
    "Plugin",
    "PluginManager",
    "RenderResult",
    "StylesheetProcessor",
]
