import logging
import random

import pytest

from picodec.codec import decode, encode, summarize
from picodec.errors import OutOfRangeError
from picodec.instructions import Literal, TableRef
from picodec.table import DigitTable


def _walk(data: bytes, instructions):
    """Yield (cursor, instruction) pairs."""

    cursor = 0
    for instr in instructions:
        yield cursor, instr
        cursor += instr.byte_count if isinstance(instr, TableRef) else 1
    assert cursor == len(data)


def test_encode_empty(pi_table: DigitTable):
    assert encode(b"", pi_table) == []
    assert decode([], pi_table) == b""


def test_single_byte_table_ref():
    """'H' (0x48) found at index 7 becomes a single table reference."""

    table = DigitTable("000000048")
    ops = encode(b"H", table)
    assert ops == [TableRef(index=7, byte_count=1)]
    assert decode(ops, table) == b"H"


def test_shrinks_to_shorter_match():
    """'Hi' is tried as "4869" first, then falls back to "48" and "69"."""

    table = DigitTable("000000048")
    ops = encode(b"Hi", table)
    assert ops == [TableRef(index=7, byte_count=1), Literal("69")]
    assert decode(ops, table) == b"Hi"


def test_two_byte_match():
    table = DigitTable("0000000486900")
    assert encode(b"Hi", table) == [TableRef(index=7, byte_count=2)]


def test_hi_against_pi(pi_table: DigitTable):
    ops = encode(b"Hi", pi_table)
    assert ops == [TableRef(index=87, byte_count=1), TableRef(index=41, byte_count=1)]


def test_hex_letter_byte_is_literal(pi_table: DigitTable):
    ops = encode(b"\x4a", pi_table)
    assert ops == [Literal("4a")]
    assert decode(ops, pi_table) == b"\x4a"


def test_letter_in_low_nibble_cuts_candidate():
    """0x1a can never match, so the run before it is matched on its own."""

    table = DigitTable("1234")
    ops = encode(b"\x12\x1a\x34", table)
    assert ops == [TableRef(0, 1), Literal("1a"), TableRef(2, 1)]


def test_length_beats_index():
    """A longer match at a higher index wins over a shorter one at index 0."""

    table = DigitTable("1200" + "1234")
    assert encode(b"\x12\x34", table) == [TableRef(index=4, byte_count=2)]


def test_lowest_index_among_occurrences(pi_table: DigitTable):
    assert encode(b"\x26", pi_table) == [TableRef(index=6, byte_count=1)]


def test_multi_byte_pi_match(pi_table: DigitTable):
    assert encode(b"\x14\x15", pi_table) == [TableRef(index=1, byte_count=2)]
    assert encode(b"\x65\x35", pi_table) == [TableRef(index=7, byte_count=2)]


def test_max_lookahead_limits_match_length():
    table = DigitTable("1234")
    assert encode(b"\x12\x34", table, max_lookahead=1) == [TableRef(0, 1), TableRef(2, 1)]
    assert encode(b"\x12\x34", table, max_lookahead=2) == [TableRef(0, 2)]


def test_invalid_max_lookahead(pi_table: DigitTable):
    with pytest.raises(ValueError):
        encode(b"abc", pi_table, max_lookahead=0)


def test_encode_accepts_bytearray(pi_table: DigitTable):
    data = bytearray(b"\x14\x15")
    assert encode(data, pi_table) == [TableRef(1, 2)]


class _MisreportingTable(DigitTable):
    """Reports index 0 for every two-byte query."""

    def find_longest_match(self, hex_string, start_search_pos=0):
        if len(hex_string) == 4:
            return 0
        return super().find_longest_match(hex_string, start_search_pos)


def test_failed_verification_falls_back_to_shorter(caplog):
    table = _MisreportingTable("12345634")
    with caplog.at_level(logging.WARNING, logger="picodec.codec"):
        ops = encode(b"\x56\x34", table)
    assert ops == [TableRef(index=4, byte_count=1), TableRef(index=2, byte_count=1)]
    assert "failed verification" in caplog.text
    assert decode(ops, table) == b"\x56\x34"


def test_roundtrip_text(pi_table: DigitTable):
    data = "Hello, world! The quick brown fox jumps over the lazy dog.".encode("utf-8")
    assert decode(encode(data, pi_table), pi_table) == data


def test_roundtrip_all_byte_values(pi_table: DigitTable):
    data = bytes(range(256))
    assert decode(encode(data, pi_table), pi_table) == data


def test_roundtrip_random_bytes(pi_table: DigitTable):
    rng = random.Random(42)
    for size in (1, 7, 64, 500):
        data = bytes(rng.randrange(256) for _ in range(size))
        assert decode(encode(data, pi_table), pi_table) == data


def test_roundtrip_empty_table():
    table = DigitTable("")
    data = b"\x00\x12\xff"
    ops = encode(data, table)
    assert all(isinstance(op, Literal) for op in ops)
    assert decode(ops, table) == data


def test_table_refs_point_at_original_bytes(pi_table: DigitTable):
    rng = random.Random(7)
    # Bytes below 0x9a with digit-only hex keep matches frequent
    digit_bytes = [b for b in range(256) if f"{b:02x}".isdigit()]
    data = bytes(rng.choice(digit_bytes) for _ in range(300))
    ops = encode(data, pi_table)
    assert any(isinstance(op, TableRef) for op in ops)
    for cursor, op in _walk(data, ops):
        if isinstance(op, TableRef):
            span = pi_table.digits[op.index : op.index + 2 * op.byte_count]
            assert span.isdigit()
            assert bytes.fromhex(span) == data[cursor : cursor + op.byte_count]


def test_greedy_maximality(pi_table: DigitTable):
    rng = random.Random(3)
    digit_bytes = [b for b in range(256) if f"{b:02x}".isdigit()]
    data = bytes(rng.choice(digit_bytes) for _ in range(300))
    window = 8
    ops = encode(data, pi_table, max_lookahead=window)
    for cursor, op in _walk(data, ops):
        chosen = op.byte_count if isinstance(op, TableRef) else 0
        limit = min(window, len(data) - cursor)
        for longer in range(chosen + 1, limit + 1):
            candidate = data[cursor : cursor + longer].hex()
            assert candidate not in pi_table.digits


def test_literal_only_for_letter_bytes(pi_table: DigitTable):
    letter_bytes = bytes(b for b in range(256) if not f"{b:02x}".isdigit())
    ops = encode(letter_bytes, pi_table)
    assert ops == [Literal(f"{b:02x}") for b in letter_bytes]


def test_decode_out_of_range():
    table = DigitTable("1234")
    assert decode([TableRef(2, 1)], table) == b"\x34"
    with pytest.raises(OutOfRangeError):
        decode([TableRef(3, 1)], table)
    with pytest.raises(OutOfRangeError):
        decode([Literal("ff"), TableRef(0, 3)], table)


def test_decode_rejects_non_instructions(pi_table: DigitTable):
    with pytest.raises(TypeError):
        decode(["Raw[ff]"], pi_table)


def test_summarize():
    ops = [TableRef(0, 3), Literal("4a"), TableRef(5, 1)]
    s = summarize(ops)
    assert s["instructions"] == 3
    assert s["table_refs"] == 2
    assert s["literals"] == 1
    assert s["input_bytes"] == 5
    assert s["matched_bytes"] == 4
    assert s["longest_match"] == 3
    assert s["match_ratio"] == pytest.approx(0.8)


def test_summarize_empty():
    assert summarize([])["match_ratio"] == 0.0
