"""Gpad CLI entry point: Click group with subcommands."""

import logging

import click

from gpad import __version__


@click.group()
@click.version_option(version=__version__, prog_name="gpad")
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """Gpad - check Gpad scripts and convert element XML to Gpad."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from gpad.cli.check import check  # noqa: E402
from gpad.cli.convert import convert  # noqa: E402

cli.add_command(check)
cli.add_command(convert)
