"""CLI command that encodes a file, stdin, or a string into π instructions.

Examples
--------
  picodec encode notes.txt --output notes.pi
  picodec encode --text "Hello" --table pi.txt
  cat image.png | picodec encode - --format json --stats
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json

import click

from picodec.codec import encode as encode_bytes, summarize
from picodec.config import Config
from picodec.commands.common import open_table, table_options
from picodec.errors import PiCodecError
from picodec.instructions import dumps, to_dict


def _read_input(input_path: Optional[Path], text: Optional[str]) -> bytes:
    if text is not None and input_path is not None:
        raise click.ClickException("Provide either INPUT or --text, not both.")
    if text is not None:
        return text.encode("utf-8")
    if input_path is None:
        raise click.ClickException("Nothing to encode: provide INPUT, '-' for stdin, or --text.")
    if str(input_path) == "-":
        return click.get_binary_stream("stdin").read()
    return input_path.read_bytes()


@click.command(name="encode")
@click.argument(
    "input_path",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option("text", "--text", type=str, required=False, help="Encode this UTF-8 string instead of a file")
@table_options
@click.option(
    "max_lookahead",
    "--max-lookahead",
    type=click.IntRange(min=1),
    default=Config.MAX_LOOKAHEAD_BYTES,
    show_default=True,
    help="Maximum bytes matched per table reference",
)
@click.option(
    "fmt",
    "--format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Instruction output format",
)
@click.option(
    "output",
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
    help="Write instructions here instead of stdout",
)
@click.option("stats", "--stats", is_flag=True, help="Print a match summary to stderr")
def encode(
    input_path: Optional[Path],
    text: Optional[str],
    table_path: Path,
    limit: Optional[int],
    max_lookahead: int,
    fmt: str,
    output: Optional[Path],
    stats: bool,
) -> None:
    """Encode bytes as Pi[...] table references and Raw[...] literals."""

    try:
        data = _read_input(input_path, text)
        table = open_table(table_path, limit)
        instructions = encode_bytes(data, table, max_lookahead=max_lookahead)

        if fmt.lower() == "json":
            payload = json.dumps({"instructions": [to_dict(i) for i in instructions]}, indent=2) + "\n"
        else:
            payload = dumps(instructions)

        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(payload, encoding="utf-8")
        else:
            click.echo(payload, nl=False)

        if stats:
            summary = summarize(instructions)
            click.echo(
                f"{summary['input_bytes']} bytes -> {summary['instructions']} instructions "
                f"({summary['table_refs']} table refs, {summary['literals']} literals, "
                f"{summary['match_ratio']:.1%} matched, longest {summary['longest_match']} bytes)",
                err=True,
            )
    except PiCodecError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
