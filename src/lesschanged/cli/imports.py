"""CLI command: lesschanged imports -- list a stylesheet's dependencies."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from lesschanged.cli.options import path_option, var_option
from lesschanged.errors import ImportProcessingError
from lesschanged.model import StylesheetFile
from lesschanged.resolver import ImportResolver


@click.command()
@click.argument("lessfile", type=click.Path(exists=True, dir_okay=False))
@path_option
@var_option
def imports(lessfile: str, paths: tuple[str, ...], global_vars: dict[str, str]) -> None:
    """List every file LESSFILE depends on, one per line.

    Conventional imports are listed first, data-uri() resources after.
    """
    resolver = ImportResolver({"paths": list(paths), "global_vars": global_vars})
    file = StylesheetFile(path=lessfile, contents=Path(lessfile).read_bytes())

    try:
        records = asyncio.run(resolver.list_imports(file))
    except ImportProcessingError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for record in records:
        click.echo(record.path)
