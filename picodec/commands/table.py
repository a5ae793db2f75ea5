"""CLI commands that put a π digit file on disk.

Examples
--------
  picodec table fetch
  picodec table fetch --url https://example.com/pi.txt --dest pi.txt --sha256 <hex>
  picodec table build --digits 100000 --dest pi-100k.txt
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click
import requests

from picodec.config import Config, DIGIT_SHA256, DIGIT_SOURCES
from picodec.digits import compute_pi_digits
from picodec.source import fetch_digit_file, write_digit_file
from picodec.table import load_digit_table


@click.group(name="table")
def table() -> None:
    """Obtain the digit file the codec uses as its dictionary."""


@table.command(name="fetch")
@click.option(
    "source",
    "--source",
    type=click.Choice(sorted(DIGIT_SOURCES), case_sensitive=False),
    default=Config.DEFAULT_DIGIT_SOURCE,
    show_default=True,
    help="Known digit file to download",
)
@click.option("url", "--url", type=str, required=False, help="Download from this URL instead of --source")
@click.option(
    "dest",
    "--dest",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Config.DEFAULT_TABLE_PATH,
    show_default=True,
    help="Where to store the digit file",
)
@click.option("expected_sha256", "--sha256", type=str, required=False, help="Expected SHA256 of the file")
@click.option("force", "--force", is_flag=True, help="Download even if the file exists")
def fetch(source: str, url: Optional[str], dest: Path, expected_sha256: Optional[str], force: bool) -> None:
    """Download a digit file and check that it parses as a digit table."""

    source = source.lower()
    if url is None:
        url = DIGIT_SOURCES[source]
        expected_sha256 = expected_sha256 or DIGIT_SHA256.get(source)

    try:
        click.echo(f"Fetching {url} -> {dest}")
        path = fetch_digit_file(url, dest, expected_sha256, force=force)
        digits = load_digit_table(path)
    except (requests.RequestException, ValueError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)

    click.secho(f"OK: {path} ({len(digits)} digits)", fg="green")


@table.command(name="build")
@click.option(
    "count",
    "--digits",
    type=click.IntRange(min=1),
    default=Config.DEFAULT_DIGIT_COUNT,
    show_default=True,
    help="Number of digits of pi to compute (including the leading 3)",
)
@click.option(
    "dest",
    "--dest",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Config.DEFAULT_TABLE_PATH,
    show_default=True,
    help="Where to write the digit file",
)
@click.option("force", "--force", is_flag=True, help="Overwrite an existing file")
def build(count: int, dest: Path, force: bool) -> None:
    """Compute digits of pi locally and write them as a digit file."""

    if dest.exists() and not force:
        click.echo(f"Digit file exists: {dest} (use --force to rebuild)")
        return

    click.echo(f"Computing {count} digits of pi...")
    digits = compute_pi_digits(count)
    write_digit_file(digits, dest)
    click.secho(f"OK: {dest} ({len(digits)} digits)", fg="green")
