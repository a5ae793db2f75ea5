"""Options and helpers shared by the codec commands."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, TypeVar

import click

from picodec.config import Config
from picodec.table import DigitTable, load_digit_table


F = TypeVar("F", bound=Callable[..., object])


def table_options(fn: F) -> F:
    """Attach ``--table`` and ``--limit`` to a command."""

    fn = click.option(
        "limit",
        "--limit",
        type=click.IntRange(min=1),
        required=False,
        help="Use only the first N digits of the table (encode and decode must agree)",
    )(fn)
    fn = click.option(
        "table_path",
        "--table",
        type=click.Path(dir_okay=False, path_type=Path),
        default=Config.DEFAULT_TABLE_PATH,
        show_default=True,
        help="Digit file used as the dictionary",
    )(fn)
    return fn


def open_table(table_path: Path, limit: Optional[int] = None) -> DigitTable:
    """Load the digit table or fail with a hint on how to create it."""

    if not table_path.exists():
        raise click.ClickException(
            f"Digit table not found: {table_path}\n"
            "Hint: run 'picodec table fetch' or 'picodec table build' first."
        )
    return load_digit_table(table_path, limit=limit)
