"""CLI command: lesschanged forget -- drop cache entries."""

from __future__ import annotations

import asyncio

import click

from lesschanged.cli.options import db_option
from lesschanged.config import LessChangedConfig
from lesschanged.runner import LessChangedRunner


@click.command()
@click.argument("lessfiles", nargs=-1, type=click.Path(dir_okay=False))
@db_option
@click.option("--all", "forget_all", is_flag=True, help="Drop every entry")
def forget(lessfiles: tuple[str, ...], db: str, forget_all: bool) -> None:
    """Forget recorded evidence so the next check reports LESSFILES as changed."""
    if not lessfiles and not forget_all:
        raise click.UsageError("Give one or more LESSFILES, or --all")

    with LessChangedRunner(LessChangedConfig(db_path=db)) as runner:
        if forget_all:
            removed = runner.repository.clear()
        else:
            removed = sum(
                1 for path in lessfiles if asyncio.run(runner.cache.forget(path))
            )
    click.echo(f"Forgot {removed} entr{'y' if removed == 1 else 'ies'}")
