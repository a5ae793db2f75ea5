"""Decimal digits of π computed locally.

Uses the Chudnovsky series evaluated by binary splitting in exact integer
arithmetic, so no download is needed to build a digit table. A million digits
takes a while in pure Python; a few thousand is instant.

>>> compute_pi_digits(10)
'3141592653'
"""

from __future__ import annotations

from math import isqrt, log10
import sys


_C = 640320
_C3_OVER_24 = _C**3 // 24
_DIGITS_PER_TERM = log10(_C3_OVER_24 / 72)
_GUARD_DIGITS = 16


def _binary_split(a: int, b: int) -> tuple[int, int, int]:
    """Return (P, Q, T) for Chudnovsky terms ``a`` (inclusive) to ``b`` (exclusive)."""

    if b - a == 1:
        if a == 0:
            p = q = 1
        else:
            p = (6 * a - 5) * (2 * a - 1) * (6 * a - 1)
            q = a * a * a * _C3_OVER_24
        t = p * (13591409 + 545140134 * a)
        if a & 1:
            t = -t
        return p, q, t
    m = (a + b) // 2
    p_am, q_am, t_am = _binary_split(a, m)
    p_mb, q_mb, t_mb = _binary_split(m, b)
    return p_am * p_mb, q_am * q_mb, q_mb * t_am + p_am * t_mb


def _pi_scaled(decimals: int) -> int:
    """Return π * 10**decimals, truncated to an integer (up to guard error)."""

    terms = int(decimals / _DIGITS_PER_TERM + 1)
    _, q, t = _binary_split(0, terms)
    one = 10**decimals
    sqrt_c = isqrt(10005 * one * one)
    return (q * 426880 * sqrt_c) // t


def _to_decimal_string(value: int) -> str:
    # Python 3.11+ caps int -> str conversion length by default.
    if not hasattr(sys, "set_int_max_str_digits"):
        return str(value)
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        return str(value)
    finally:
        sys.set_int_max_str_digits(previous)


def compute_pi_digits(count: int) -> str:
    """Return the first ``count`` decimal digits of π, starting with "3"."""

    if count < 0:
        raise ValueError("count must be >= 0")
    if count == 0:
        return ""
    text = _to_decimal_string(_pi_scaled(count + _GUARD_DIGITS))
    return text[:count]


__all__ = ["compute_pi_digits"]
