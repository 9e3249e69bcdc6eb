"""Options shared by several subcommands."""

from __future__ import annotations

import click


def parse_assignments(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Click callback turning repeated ``NAME=VALUE`` options into a dict."""
    result: dict[str, str] = {}
    for item in values:
        name, sep, value = item.partition("=")
        name = name.strip().lstrip("@")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {item!r}", ctx=ctx, param=param)
        result[name] = value
    return result


path_option = click.option(
    "-p",
    "--path",
    "paths",
    multiple=True,
    help="Extra import search path (repeatable, searched in order)",
)

var_option = click.option(
    "--var",
    "global_vars",
    multiple=True,
    callback=parse_assignments,
    help="Global variable NAME=VALUE visible to every stylesheet (repeatable)",
)

db_option = click.option(
    "--db",
    default=".lesschanged/cache.db",
    show_default=True,
    help="Cache database path",
)
