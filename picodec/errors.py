"""Exception types raised by picodec.

Encoding is total and has no error kind of its own. Decoding can fail only
when an instruction points outside the digit table; parsing of serialized
instructions and construction of a digit table have their own errors.
"""

from __future__ import annotations


class PiCodecError(Exception):
    """Base class for all picodec errors."""


class OutOfRangeError(PiCodecError, IndexError):
    """A table reference spans digits outside the digit table."""

    def __init__(self, index: int, byte_count: int, table_length: int) -> None:
        self.index = index
        self.byte_count = byte_count
        self.table_length = table_length
        super().__init__(
            f"Table reference Pi[{index}] ({byte_count} bytes) needs digits "
            f"[{index}, {index + 2 * byte_count}) but the table holds {table_length}"
        )


class InvalidDigitTableError(PiCodecError, ValueError):
    """Digit table input contains something other than decimal digits."""


class InstructionFormatError(PiCodecError, ValueError):
    """A serialized instruction could not be parsed."""


__all__ = [
    "PiCodecError",
    "OutOfRangeError",
    "InvalidDigitTableError",
    "InstructionFormatError",
]
