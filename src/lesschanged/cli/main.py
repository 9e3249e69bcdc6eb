"""lesschanged CLI entry point: Click group with subcommands."""

import logging

import click

from lesschanged import __version__


@click.group()
@click.version_option(version=__version__, prog_name="lesschanged")
@click.option("-v", "--verbose", is_flag=True, help="Log cache decisions to stderr")
def cli(verbose: bool) -> None:
    """lesschanged - find LESS files whose sources or dependencies changed."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from lesschanged.cli.changed import changed  # noqa: E402
from lesschanged.cli.forget import forget  # noqa: E402
from lesschanged.cli.imports import imports  # noqa: E402

cli.add_command(imports)
cli.add_command(changed)
cli.add_command(forget)
