"""
picodec: encode bytes as references into the digits of π.

Each byte is written as two hex characters; runs of those characters that are
all decimal digits are looked up in a fixed table of π digits and replaced by
their position, everything else is kept as a literal. The encoding is exactly
reversible and makes no attempt to be smaller than its input.
"""

__all__ = [
    "Config",
    "get_config",
    "__version__",
    # Core
    "DigitTable",
    "load_digit_table",
    "TableRef",
    "Literal",
    "Instruction",
    "encode",
    "decode",
    "summarize",
    # Errors
    "PiCodecError",
    "OutOfRangeError",
    "InvalidDigitTableError",
    "InstructionFormatError",
    # Digit sources (lazy-imported via __getattr__)
    "compute_pi_digits",
    "fetch_digit_file",
    "write_digit_file",
]

__version__ = "0.1.0"

from typing import Any

from picodec.config import Config, get_config
from picodec.errors import (
    PiCodecError,
    OutOfRangeError,
    InvalidDigitTableError,
    InstructionFormatError,
)
from picodec.table import DigitTable, load_digit_table
from picodec.instructions import TableRef, Literal, Instruction
from picodec.codec import encode, decode, summarize


def __getattr__(name: str) -> Any:  # requests/tqdm are only needed for fetching
    if name == "compute_pi_digits":
        from picodec.digits import compute_pi_digits as _cpd

        return _cpd
    if name == "fetch_digit_file":
        from picodec.source import fetch_digit_file as _fdf

        return _fdf
    if name == "write_digit_file":
        from picodec.source import write_digit_file as _wdf

        return _wdf
    raise AttributeError(f"module 'picodec' has no attribute {name!r}")
