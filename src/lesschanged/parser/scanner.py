"""Tokenize LESS sources with Lark and pick out the statements that matter.

The grammar in ``grammar.lark`` is purely lexical: LESS is far too permissive
for a useful LALR grammar, and dependency listing only needs three things:

* ``@import`` directives (anywhere, including inside blocks),
* top-level variable declarations (for ``@{name}`` interpolation),
* every function call, nested calls included.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token
from lark.exceptions import LarkError

from lesschanged.errors import StylesheetSyntaxError
from lesschanged.parser.nodes import (
    Argument,
    ExpressionArgument,
    FunctionCall,
    ImportDirective,
    ParsedStylesheet,
    QuotedArgument,
    VariableArgument,
    VariableValue,
)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_OPENERS = ("FUNCTION", "LPAR", "LBRACE")
_CLOSERS = ("RPAR", "RBRACE")


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        lexer="basic",
        start="start",
    )


def tokenize(source: str, filename: str | None = None) -> list[Token]:
    """Split LESS source into tokens, dropping whitespace and comments."""
    try:
        tree = _parser().parse(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        where = f" in '{filename}'" if filename else ""
        raise StylesheetSyntaxError(
            f"Unrecognized input{where}: {e}", filename, line, column, cause=e
        ) from e
    return [t for t in tree.children if isinstance(t, Token)]


def unquote(raw: str) -> str:
    """Strip surrounding quotes and process simple escapes."""
    quote = raw[0]
    body = raw[1:-1]
    return body.replace("\\" + quote, quote).replace("\\\\", "\\")


# ---------------------------------------------------------------------------
# Token-stream helpers
# ---------------------------------------------------------------------------


def _statement_end(tokens: list[Token], start: int) -> int:
    """Index of the ``;`` (or enclosing ``}``) that ends a statement."""
    depth = 0
    i = start
    while i < len(tokens):
        kind = tokens[i].type
        if kind in _OPENERS:
            depth += 1
        elif kind in _CLOSERS:
            if depth == 0:
                return i
            depth -= 1
        elif kind == "SEMICOLON" and depth == 0:
            return i
        i += 1
    return i


def _matching_paren(tokens: list[Token], start: int, filename: str | None) -> int:
    """Index of the ``)`` closing the call opened at ``tokens[start]``."""
    depth = 1
    for i in range(start + 1, len(tokens)):
        kind = tokens[i].type
        if kind in ("FUNCTION", "LPAR"):
            depth += 1
        elif kind == "RPAR":
            depth -= 1
            if depth == 0:
                return i
    opener = tokens[start]
    raise StylesheetSyntaxError(
        f"Unclosed call to '{opener.value[:-1]}'",
        filename,
        opener.line,
        opener.column,
    )


def _split_arguments(tokens: list[Token]) -> list[list[Token]]:
    """Split call arguments on top-level commas."""
    if not tokens:
        return []
    groups: list[list[Token]] = [[]]
    depth = 0
    for tok in tokens:
        if tok.type in _OPENERS:
            depth += 1
        elif tok.type in _CLOSERS:
            depth -= 1
        if tok.type == "COMMA" and depth == 0:
            groups.append([])
        else:
            groups[-1].append(tok)
    return groups


def _text(tokens: list[Token]) -> str:
    return " ".join(str(t) for t in tokens)


def _build_argument(tokens: list[Token]) -> Argument:
    if len(tokens) == 1 and tokens[0].type == "STRING":
        raw = str(tokens[0])
        return QuotedArgument(value=unquote(raw), quote=raw[0])
    if len(tokens) == 2 and str(tokens[0]) == "~" and tokens[1].type == "STRING":
        raw = str(tokens[1])
        return QuotedArgument(value=unquote(raw), quote=raw[0], escaped=True)
    if len(tokens) == 1 and tokens[0].type == "AT_KEYWORD":
        return VariableArgument(name=str(tokens[0])[1:])
    return ExpressionArgument(text=_text(tokens))


def _build_call(tokens: list[Token], start: int, filename: str | None) -> FunctionCall:
    close = _matching_paren(tokens, start, filename)
    opener = tokens[start]
    arguments = tuple(_build_argument(g) for g in _split_arguments(tokens[start + 1 : close]))
    return FunctionCall(
        name=str(opener)[:-1].lower(),
        arguments=arguments,
        line=opener.line,
        column=opener.column,
    )


def _build_import(keyword: Token, body: list[Token], filename: str | None) -> ImportDirective:
    """Build an ImportDirective from the tokens between ``@import`` and ``;``."""
    i = 0
    options: set[str] = set()
    if body and body[0].type == "LPAR":
        i = 1
        while i < len(body) and body[i].type != "RPAR":
            if body[i].type == "WORD":
                options.add(str(body[i]).lower())
            i += 1
        i += 1

    path: str | None = None
    is_url = False
    if i < len(body):
        tok = body[i]
        if tok.type == "STRING":
            path = unquote(str(tok))
            i += 1
        elif tok.type == "URL":
            path = str(tok)[4:-1].strip()
            is_url = True
            i += 1
        elif (
            tok.type == "FUNCTION"
            and str(tok).lower() == "url("
            and i + 2 < len(body)
            and body[i + 1].type == "STRING"
            and body[i + 2].type == "RPAR"
        ):
            path = unquote(str(body[i + 1]))
            is_url = True
            i += 3

    if path is None:
        raise StylesheetSyntaxError(
            "Malformed @import directive", filename, keyword.line, keyword.column
        )
    return ImportDirective(
        path=path,
        options=frozenset(options),
        media=_text(body[i:]),
        is_url=is_url,
        line=keyword.line,
        column=keyword.column,
    )


def _build_variable(value: list[Token]) -> VariableValue:
    if len(value) == 1 and value[0].type == "STRING":
        return VariableValue(text=unquote(str(value[0])))
    if len(value) == 2 and str(value[0]) == "~" and value[1].type == "STRING":
        return VariableValue(text=unquote(str(value[1])))
    if len(value) == 1 and value[0].type == "AT_KEYWORD":
        return VariableValue(text=str(value[0]), reference=str(value[0])[1:])
    return VariableValue(text=_text(value))


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def scan_stylesheet(source: str, filename: str | None = None) -> ParsedStylesheet:
    """Extract imports, top-level variables and function calls from *source*."""
    tokens = tokenize(source, filename)
    parsed = ParsedStylesheet()

    brace_depth = 0
    paren_depth = 0
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        kind = tok.type

        if kind == "LBRACE":
            brace_depth += 1
        elif kind == "RBRACE":
            brace_depth = max(0, brace_depth - 1)
        elif kind == "LPAR":
            paren_depth += 1
        elif kind == "RPAR":
            paren_depth = max(0, paren_depth - 1)
        elif kind == "AT_KEYWORD" and str(tok).lower() == "@import":
            end = _statement_end(tokens, i + 1)
            parsed.imports.append(_build_import(tok, tokens[i + 1 : end], filename))
            # A closing brace ends the block as well as the statement.
            i = end + 1 if end < len(tokens) and tokens[end].type == "SEMICOLON" else end
            continue
        elif (
            kind == "AT_KEYWORD"
            and brace_depth == 0
            and paren_depth == 0
            and i + 1 < len(tokens)
            and tokens[i + 1].type == "COLON"
        ):
            end = _statement_end(tokens, i + 2)
            parsed.variables[str(tok)[1:]] = _build_variable(tokens[i + 2 : end])
            # Fall through so calls inside the value are still collected.
        elif kind == "FUNCTION":
            paren_depth += 1
            parsed.calls.append(_build_call(tokens, i, filename))

        i += 1

    return parsed
