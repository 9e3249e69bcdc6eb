"""Statement nodes extracted from LESS sources."""

from __future__ import annotations

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Function-call arguments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QuotedArgument:
    """A quoted string argument, e.g. ``"image.svg"`` or ``~"raw"``."""

    value: str
    quote: str = '"'
    escaped: bool = False

    @property
    def is_interpolated(self) -> bool:
        return "@{" in self.value

    @property
    def is_literal(self) -> bool:
        return not self.is_interpolated


@dataclass(frozen=True)
class VariableArgument:
    """A variable reference argument, e.g. ``@image``."""

    name: str

    is_literal = False


@dataclass(frozen=True)
class ExpressionArgument:
    """Any other argument: keywords, numbers, nested calls, operations."""

    text: str

    is_literal = False


Argument = QuotedArgument | VariableArgument | ExpressionArgument


@dataclass(frozen=True)
class FunctionCall:
    """A function call found anywhere in a stylesheet."""

    name: str
    arguments: tuple[Argument, ...] = ()
    line: int | None = None
    column: int | None = None


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImportDirective:
    """An ``@import`` directive.

    ``options`` holds the lower-cased import options, e.g. ``reference`` or
    ``optional``; ``media`` is the trailing media query, if any.
    """

    path: str
    options: frozenset[str] = frozenset()
    media: str = ""
    is_url: bool = False
    line: int | None = None
    column: int | None = None


@dataclass(frozen=True)
class VariableValue:
    """The value of a top-level variable declaration.

    ``reference`` is set when the value is another variable (``@a: @b;``).
    """

    text: str
    reference: str | None = None


@dataclass(frozen=True)
class ParsedStylesheet:
    """Everything the import expander needs from one source file."""

    imports: list[ImportDirective] = field(default_factory=list)
    variables: dict[str, VariableValue] = field(default_factory=dict)
    calls: list[FunctionCall] = field(default_factory=list)
