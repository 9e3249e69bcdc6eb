"""Error hierarchy for import listing and change detection."""
from __future__ import annotations

from collections.abc import Sequence


class LessChangedError(Exception):
    """Base error for all lesschanged errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StylesheetSyntaxError(LessChangedError):
    """Raised when LESS source cannot be tokenized."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        line: int | None = None,
        column: int | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(message, cause=cause)


class StylesheetProcessorError(LessChangedError):
    """Raised when the stylesheet processor cannot expand a file's imports."""

    def __init__(
        self, message: str, filename: str | None = None, *, cause: Exception | None = None
    ) -> None:
        self.filename = filename
        super().__init__(message, cause=cause)


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


class ResolutionError(LessChangedError):
    """The path resolver could not produce a location."""


class ImportNotFoundError(ResolutionError):
    """No candidate location for a referenced file exists."""

    def __init__(self, path: str, tried: Sequence[str] = ()) -> None:
        self.path = path
        self.tried = tuple(tried)
        message = f"'{path}' wasn't found"
        if self.tried:
            message += ". Tried - " + ", ".join(self.tried)
        super().__init__(message)


# ---------------------------------------------------------------------------
# Import listing
# ---------------------------------------------------------------------------


class MalformedReferenceError(LessChangedError):
    """An embedded-resource call has the wrong argument shape."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(message)


class ImportProcessingError(LessChangedError):
    """Listing the dependencies of a root stylesheet failed."""

    def __init__(self, root_path: str, *, cause: Exception | None = None) -> None:
        self.root_path = root_path
        message = f"Failed to process imports for '{root_path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message, cause=cause)


class CacheError(LessChangedError):
    """The change-detection store is unusable."""
