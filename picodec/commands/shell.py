"""Interactive loop: type text, see its π instructions and the decoded result."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from picodec.codec import decode, encode
from picodec.commands.common import open_table, table_options
from picodec.errors import PiCodecError
from picodec.instructions import format_instruction


@click.command(name="shell")
@table_options
def shell(table_path: Path, limit: Optional[int]) -> None:
    """Encode lines typed at the prompt until Q is entered.

    Examples:
      picodec shell
      picodec shell --table pi.txt --limit 100000
    """

    try:
        table = open_table(table_path, limit)
        click.echo(f"Loaded {len(table)} digits from {table_path}")

        while True:
            try:
                line = click.prompt(
                    "Enter text to compress (Q to quit)",
                    default="",
                    show_default=False,
                    prompt_suffix=": ",
                )
            except click.Abort:
                # EOF on stdin
                click.echo()
                break
            text = line.strip()
            if text == "Q":
                break

            instructions = encode(text.encode("utf-8"), table)
            click.echo("[" + ", ".join(format_instruction(i) for i in instructions) + "]")
            restored = decode(instructions, table)
            click.echo(restored.decode("utf-8", errors="replace"))
    except PiCodecError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
