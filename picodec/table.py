"""Digit table: the fixed dictionary the codec references into.

A :class:`DigitTable` wraps an immutable string of decimal digits (in practice
the first million digits of π) and answers two questions: where does a digit
string first occur, and which digits sit at a given span.

Example
-------
>>> from picodec.table import DigitTable
>>> table = DigitTable("31415926535897932384")
>>> table.find_longest_match("26")
6
>>> table.find_longest_match("4a") is None
True
>>> table.read_span(6, 1)
'26'
"""

from __future__ import annotations

from collections import OrderedDict
from pathlib import Path
from typing import Optional
import logging
import threading

from picodec.config import Config
from picodec.errors import InvalidDigitTableError, OutOfRangeError


_LOGGER = logging.getLogger(__name__)

_DIGITS = frozenset("0123456789")


def is_digit_string(text: str) -> bool:
    """Return True if ``text`` is non-empty and made only of ASCII '0'-'9'."""

    return bool(text) and text.isascii() and text.isdigit()


class DigitTable:
    """Immutable sequence of decimal digits with first-occurrence search.

    Parameters
    ----------
    digits:
        The digit string. Every character must be one of '0'-'9'.
    cache_size:
        Number of search results memoised for searches starting at position
        0. Use 0 to disable the cache.
    """

    __slots__ = ("_digits", "_cache", "_cache_size", "_lock")

    def __init__(self, digits: str, *, cache_size: int = Config.SEARCH_CACHE_SIZE) -> None:
        if digits and not is_digit_string(digits):
            bad = next(i for i, ch in enumerate(digits) if ch not in _DIGITS)
            raise InvalidDigitTableError(
                f"Digit table must contain only '0'-'9'; found {digits[bad]!r} at position {bad}"
            )
        if cache_size < 0:
            raise ValueError("cache_size must be >= 0")
        self._digits: str = digits
        self._cache: "OrderedDict[str, Optional[int]]" = OrderedDict()
        self._cache_size: int = cache_size
        self._lock = threading.Lock()

    # Construction helpers -----------------------------------------------------
    @classmethod
    def from_text(cls, text: str, **kwargs) -> "DigitTable":
        """Build a table from digit file text such as ``"3.14159\\n26535"``.

        Whitespace is dropped and a single decimal point is removed; anything
        else that is not a digit is rejected.
        """

        cleaned = "".join(text.split())
        if cleaned.count(".") > 1:
            raise InvalidDigitTableError("Digit text contains more than one decimal point")
        return cls(cleaned.replace(".", "", 1), **kwargs)

    # Queries --------------------------------------------------------------------
    @property
    def digits(self) -> str:
        return self._digits

    def __len__(self) -> int:
        return len(self._digits)

    def __repr__(self) -> str:
        head = self._digits[:10]
        more = "..." if len(self._digits) > 10 else ""
        return f"DigitTable({head}{more}, length={len(self._digits)})"

    def find_longest_match(self, hex_string: str, start_search_pos: int = 0) -> Optional[int]:
        """Return the lowest index >= ``start_search_pos`` where ``hex_string`` occurs.

        Strings holding any character outside '0'-'9' (the hex letters 'a'-'f'
        in particular) can never occur in the table and return None without a
        search. The empty string also returns None.
        """

        if start_search_pos < 0:
            raise ValueError("start_search_pos must be >= 0")
        if not is_digit_string(hex_string):
            return None
        if start_search_pos > 0 or self._cache_size == 0:
            return self._search(hex_string, start_search_pos)

        with self._lock:
            if hex_string in self._cache:
                self._cache.move_to_end(hex_string)
                return self._cache[hex_string]
        found = self._search(hex_string, 0)
        with self._lock:
            self._cache[hex_string] = found
            if len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        return found

    def read_span(self, index: int, byte_count: int) -> str:
        """Return the ``2 * byte_count`` digits starting at ``index``.

        Raises
        ------
        OutOfRangeError
            If the span does not lie entirely inside the table.
        """

        end = index + 2 * byte_count
        if index < 0 or byte_count < 1 or end > len(self._digits):
            raise OutOfRangeError(index, byte_count, len(self._digits))
        return self._digits[index:end]

    # Internal utilities -------------------------------------------------------
    def _search(self, needle: str, start: int) -> Optional[int]:
        pos = self._digits.find(needle, start)
        return None if pos < 0 else pos


def load_digit_table(path: Path, *, limit: Optional[int] = None, **kwargs) -> DigitTable:
    """Read a UTF-8 digit file and return its :class:`DigitTable`.

    Parameters
    ----------
    path:
        Digit file, e.g. ``pi-1000000.txt`` starting with ``3.14159``.
    limit:
        If given, keep only the first ``limit`` digits.
    """

    if limit is not None and limit < 0:
        raise ValueError("limit must be >= 0")
    text = path.read_text(encoding="utf-8")
    table = DigitTable.from_text(text, **kwargs)
    if limit is not None and limit < len(table):
        table = DigitTable(table.digits[:limit], **kwargs)
    _LOGGER.debug("Loaded %d digits from %s", len(table), path)
    return table


__all__ = ["DigitTable", "load_digit_table", "is_digit_string"]
