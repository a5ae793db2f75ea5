"""CLI command that replays π instructions back into the original bytes.

Examples
--------
  picodec decode notes.pi --output notes.txt
  picodec decode notes.json --format json
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import json

import click

from picodec.codec import decode as decode_instructions
from picodec.commands.common import open_table, table_options
from picodec.errors import InstructionFormatError, PiCodecError
from picodec.instructions import Instruction, from_dict, loads


def _parse_json(text: str) -> list[Instruction]:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InstructionFormatError(f"Invalid JSON: {exc}") from exc
    items = doc.get("instructions") if isinstance(doc, dict) else doc
    if not isinstance(items, list):
        raise InstructionFormatError("Expected a list of instructions or an object with 'instructions'")
    return [from_dict(item) for item in items]


@click.command(name="decode")
@click.argument(
    "input_path",
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@table_options
@click.option(
    "fmt",
    "--format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Instruction input format",
)
@click.option(
    "output",
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
    help="Write decoded bytes here instead of stdout",
)
def decode(
    input_path: Path,
    table_path: Path,
    limit: Optional[int],
    fmt: str,
    output: Optional[Path],
) -> None:
    """Decode Pi[...] / Raw[...] instructions back to bytes."""

    try:
        if str(input_path) == "-":
            raw = click.get_binary_stream("stdin").read()
        else:
            raw = input_path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InstructionFormatError(f"Instructions are not valid UTF-8: {exc}") from exc
        instructions = _parse_json(text) if fmt.lower() == "json" else loads(text)

        table = open_table(table_path, limit)
        data = decode_instructions(instructions, table)

        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(data)
        else:
            stdout = click.get_binary_stream("stdout")
            stdout.write(data)
            stdout.flush()
    except PiCodecError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
