from __future__ import annotations

from pathlib import Path

import pytest

from picodec.table import DigitTable


# First 100 digits of pi, leading 3 included.
PI_100 = (
    "3141592653589793238462643383279502884197169399375105820974944592307816406286208998628034825342117067"
)


@pytest.fixture()
def pi_table() -> DigitTable:
    return DigitTable(PI_100)


@pytest.fixture()
def pi_file(tmp_path: Path) -> Path:
    path = tmp_path / "pi.txt"
    path.write_text(f"{PI_100[0]}.{PI_100[1:]}\n", encoding="utf-8")
    return path
