"""Instruction types produced by the encoder and replayed by the decoder.

An encoded stream is a list of instructions in original byte order:

- :class:`TableRef` points at ``byte_count * 2`` digits of the digit table.
- :class:`Literal` carries the two hex characters of one unmatched byte.

The textual form, one instruction per line, is::

    Pi[<index>] (<N> bytes)
    Raw[<hh>]

A JSON-friendly mapping form is provided by :func:`to_dict` / :func:`from_dict`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Union
import re

from picodec.errors import InstructionFormatError


_HEX_CHARS = frozenset("0123456789abcdef")


@dataclass(frozen=True)
class TableRef:
    """Reference to ``byte_count`` bytes stored as digits at ``index``."""

    index: int
    byte_count: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"TableRef index must be >= 0, got {self.index}")
        if self.byte_count < 1:
            raise ValueError(f"TableRef byte_count must be >= 1, got {self.byte_count}")

    @property
    def digit_count(self) -> int:
        return 2 * self.byte_count


@dataclass(frozen=True)
class Literal:
    """One byte kept verbatim as its two lowercase hex characters."""

    hex_byte: str

    def __post_init__(self) -> None:
        if len(self.hex_byte) != 2 or not set(self.hex_byte) <= _HEX_CHARS:
            raise ValueError(
                f"Literal hex_byte must be two lowercase hex characters, got {self.hex_byte!r}"
            )

    @classmethod
    def from_byte(cls, value: int) -> "Literal":
        return cls(f"{value:02x}")

    @property
    def value(self) -> int:
        return int(self.hex_byte, 16)


Instruction = Union[TableRef, Literal]


# Text form --------------------------------------------------------------------
_TABLE_REF_RE = re.compile(r"^Pi\[([0-9]+)\] \(([0-9]+) bytes\)$")
_LITERAL_RE = re.compile(r"^Raw\[([0-9a-fA-F]{2})\]$")


def format_instruction(instr: Instruction) -> str:
    if isinstance(instr, TableRef):
        return f"Pi[{instr.index}] ({instr.byte_count} bytes)"
    if isinstance(instr, Literal):
        return f"Raw[{instr.hex_byte}]"
    raise TypeError(f"Not an instruction: {instr!r}")


def parse_instruction(token: str) -> Instruction:
    """Parse one ``Pi[...]`` or ``Raw[...]`` token.

    Raises
    ------
    InstructionFormatError
        If ``token`` matches neither form or carries invalid values.
    """

    text = token.strip()
    m = _TABLE_REF_RE.match(text)
    if m:
        try:
            return TableRef(index=int(m.group(1)), byte_count=int(m.group(2)))
        except ValueError as exc:
            raise InstructionFormatError(f"Invalid table reference {text!r}: {exc}") from exc
    m = _LITERAL_RE.match(text)
    if m:
        return Literal(m.group(1).lower())
    raise InstructionFormatError(f"Unrecognized instruction: {text!r}")


def dumps(instructions: Iterable[Instruction]) -> str:
    """Serialize instructions to text, one per line."""

    lines = [format_instruction(i) for i in instructions]
    return "\n".join(lines) + "\n" if lines else ""


def loads(text: str) -> list[Instruction]:
    """Parse text produced by :func:`dumps`; blank lines are ignored."""

    out: list[Instruction] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            out.append(parse_instruction(line))
        except InstructionFormatError as exc:
            raise InstructionFormatError(f"line {lineno}: {exc}") from exc
    return out


# Mapping form -----------------------------------------------------------------
def to_dict(instr: Instruction) -> dict[str, Any]:
    if isinstance(instr, TableRef):
        return {"type": "table_ref", "index": instr.index, "byte_count": instr.byte_count}
    if isinstance(instr, Literal):
        return {"type": "literal", "hex": instr.hex_byte}
    raise TypeError(f"Not an instruction: {instr!r}")


def from_dict(obj: Any) -> Instruction:
    """Inverse of :func:`to_dict`."""

    if not isinstance(obj, dict):
        raise InstructionFormatError(f"Instruction must be an object, got {type(obj).__name__}")
    kind = obj.get("type")
    try:
        if kind == "table_ref":
            index, byte_count = obj["index"], obj["byte_count"]
            if not isinstance(index, int) or not isinstance(byte_count, int):
                raise ValueError("index and byte_count must be integers")
            return TableRef(index=index, byte_count=byte_count)
        if kind == "literal":
            hex_byte = obj["hex"]
            if not isinstance(hex_byte, str):
                raise ValueError("hex must be a string")
            return Literal(hex_byte.lower())
    except (KeyError, ValueError) as exc:
        raise InstructionFormatError(f"Invalid {kind} instruction {obj!r}: {exc}") from exc
    raise InstructionFormatError(f"Unknown instruction type: {kind!r}")


__all__ = [
    "TableRef",
    "Literal",
    "Instruction",
    "format_instruction",
    "parse_instruction",
    "dumps",
    "loads",
    "to_dict",
    "from_dict",
]
