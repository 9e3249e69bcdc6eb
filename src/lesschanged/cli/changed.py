"""CLI command: lesschanged changed -- print the stylesheets that need rebuilding."""

from __future__ import annotations

import asyncio
import sys

import click

from lesschanged.cache.evidence import EVIDENCE_KINDS
from lesschanged.cli.options import db_option, path_option, var_option
from lesschanged.config import LessChangedConfig
from lesschanged.errors import LessChangedError
from lesschanged.runner import LessChangedRunner


@click.command()
@click.argument("lessfiles", nargs=-1, required=True, type=click.Path(dir_okay=False))
@db_option
@click.option(
    "--evidence",
    type=click.Choice(sorted(EVIDENCE_KINDS)),
    default="mtime",
    show_default=True,
    help="How changes are detected",
)
@path_option
@var_option
@click.option(
    "--record",
    is_flag=True,
    help="Record fresh evidence for the changed files (use when building them next)",
)
def changed(
    lessfiles: tuple[str, ...],
    db: str,
    evidence: str,
    paths: tuple[str, ...],
    global_vars: dict[str, str],
    record: bool,
) -> None:
    """Print each LESSFILE that changed since its evidence was last recorded.

    A file changed when it, or anything it imports or embeds with
    data-uri(), was modified, added, or deleted.
    """
    config = LessChangedConfig(
        db_path=db,
        evidence=evidence,
        paths=paths,
        global_vars=global_vars,
    )
    try:
        with LessChangedRunner(config) as runner:
            result = asyncio.run(runner.changed_files(lessfiles, record=record))
    except (LessChangedError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for path in result:
        click.echo(path)
