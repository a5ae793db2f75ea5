"""Command-line interface for picodec using Click command groups."""

from __future__ import annotations

import logging
from typing import NoReturn

import click

from picodec import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("verbose", "-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """picodec: encode bytes as positions in the digits of pi."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from picodec.commands.encode import encode  # noqa: E402
from picodec.commands.decode import decode  # noqa: E402
from picodec.commands.shell import shell  # noqa: E402
from picodec.commands.table import table  # noqa: E402

cli.add_command(encode)
cli.add_command(decode)
cli.add_command(shell)
cli.add_command(table)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
