"""Filesystem capability and implementations."""

from lesschanged.filesystem.local import LocalFileSystem
from lesschanged.filesystem.stub import StubFileSystem
from lesschanged.filesystem.types import FileStat, FileSystem

__all__ = [
    "FileStat",
    "FileSystem",
    "LocalFileSystem",
    "StubFileSystem",
]
