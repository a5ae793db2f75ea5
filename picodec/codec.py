"""Greedy longest-match codec over a digit table.

Each input byte is written as two hex characters. Wherever a run of those
characters is made only of decimal digits and occurs in the digit table, the
run is replaced by a :class:`~picodec.instructions.TableRef` to its first
occurrence; bytes that cannot be matched become
:class:`~picodec.instructions.Literal` instructions.

Example
-------
>>> from picodec.table import DigitTable
>>> from picodec.codec import encode, decode
>>> table = DigitTable("31415926535897932384626433832795")
>>> ops = encode(b"\\x26\\x4a", table)
>>> ops
[TableRef(index=6, byte_count=1), Literal(hex_byte='4a')]
>>> decode(ops, table)
b'&J'

There is no promise that the instruction stream is smaller than the input.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional
import logging

from picodec.config import get_config
from picodec.errors import OutOfRangeError
from picodec.instructions import Instruction, Literal, TableRef
from picodec.table import DigitTable


_LOGGER = logging.getLogger(__name__)


def _digit_prefix_bytes(hex_window: str) -> int:
    """Number of leading bytes in ``hex_window`` whose hex is all digits."""

    for pos, ch in enumerate(hex_window):
        if ch > "9":
            return pos // 2
    return len(hex_window) // 2


def _verify(table: DigitTable, index: int, expected: bytes) -> bool:
    """Read the span back from ``table`` and compare it with ``expected``."""

    try:
        span = table.read_span(index, len(expected))
    except OutOfRangeError:
        return False
    return bytes.fromhex(span) == expected


def encode(
    data: bytes,
    table: DigitTable,
    *,
    max_lookahead: Optional[int] = None,
) -> list[Instruction]:
    """Encode ``data`` as table references and literals.

    Parameters
    ----------
    data:
        Arbitrary bytes. Empty input yields an empty list.
    table:
        Digit table to search.
    max_lookahead:
        Maximum bytes considered per match attempt (default:
        ``Config.MAX_LOOKAHEAD_BYTES``). Matches are longest within this
        window.

    Notes
    -----
    At each position the longest candidate is tried first and shortened one
    byte at a time. A byte whose hex holds a letter can never be part of a
    match, so the window is cut just before it. Every hit is read back from
    the table and compared with the input before it is emitted.
    """

    window = get_config().MAX_LOOKAHEAD_BYTES if max_lookahead is None else int(max_lookahead)
    if window < 1:
        raise ValueError(f"max_lookahead must be >= 1, got {window}")

    data = bytes(data)
    out: list[Instruction] = []
    cursor = 0
    while cursor < len(data):
        chunk = data[cursor : cursor + window]
        hex_window = chunk.hex()

        ref: Optional[TableRef] = None
        for length in range(_digit_prefix_bytes(hex_window), 0, -1):
            index = table.find_longest_match(hex_window[: 2 * length])
            if index is None:
                continue
            if _verify(table, index, chunk[:length]):
                ref = TableRef(index=index, byte_count=length)
                break
            _LOGGER.warning(
                "Table match at %d for %d bytes failed verification at offset %d",
                index,
                length,
                cursor,
            )

        if ref is None:
            out.append(Literal.from_byte(data[cursor]))
            cursor += 1
        else:
            out.append(ref)
            cursor += ref.byte_count

    _LOGGER.debug("Encoded %d bytes into %d instructions", len(data), len(out))
    return out


def decode(instructions: Iterable[Instruction], table: DigitTable) -> bytes:
    """Replay ``instructions`` against ``table`` and return the original bytes.

    Raises
    ------
    OutOfRangeError
        If a table reference spans digits beyond the end of ``table``.
    TypeError
        If an element is not a TableRef or Literal.
    """

    buf = bytearray()
    for instr in instructions:
        if isinstance(instr, TableRef):
            buf += bytes.fromhex(table.read_span(instr.index, instr.byte_count))
        elif isinstance(instr, Literal):
            buf.append(instr.value)
        else:
            raise TypeError(f"Not an instruction: {instr!r}")
    return bytes(buf)


def summarize(instructions: Iterable[Instruction]) -> dict[str, Any]:
    """Return counts describing an instruction stream."""

    refs = 0
    literals = 0
    matched = 0
    longest = 0
    for instr in instructions:
        if isinstance(instr, TableRef):
            refs += 1
            matched += instr.byte_count
            longest = max(longest, instr.byte_count)
        else:
            literals += 1
    total = matched + literals
    return {
        "instructions": refs + literals,
        "table_refs": refs,
        "literals": literals,
        "input_bytes": total,
        "matched_bytes": matched,
        "longest_match": longest,
        "match_ratio": (matched / total) if total else 0.0,
    }


__all__ = ["encode", "decode", "summarize"]
