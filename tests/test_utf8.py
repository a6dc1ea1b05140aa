import pytest

from dynmenu.utf8 import INVALID, decode, decode_byte, next_rune, validate


@pytest.mark.parametrize("char", ["a", "\u00e9", "\u20ac", "\U0001F600", "\x7f", "\U0010FFFF"])
def test_round_trip_of_valid_characters(char):
    encoded = char.encode("utf-8")
    assert decode(encoded) == (ord(char), len(encoded))


def test_decode_ignores_trailing_bytes():
    assert decode("\u00e9tude".encode()) == (ord("\u00e9"), 2)


def test_empty_input():
    assert decode(b"") == (INVALID, 0)


def test_lone_continuation_byte():
    assert decode(b"\x80abc") == (INVALID, 1)


def test_invalid_lead_byte():
    assert decode(b"\xff") == (INVALID, 1)


def test_truncated_sequence_consumes_nothing():
    assert decode(b"\xe2\x82") == (INVALID, 0)


def test_interrupted_sequence():
    assert decode(b"\xe2a") == (INVALID, 1)
    assert decode(b"\xf0\x9f\x98a") == (INVALID, 3)


def test_overlong_and_surrogate_are_replaced():
    assert decode(b"\xc0\x80") == (INVALID, 2)
    assert decode(b"\xed\xa0\x80") == (INVALID, 3)


def test_decode_byte_kinds():
    assert decode_byte(0x41) == (0x41, 1)
    assert decode_byte(0x80) == (0, 0)
    assert decode_byte(0xC3)[1] == 2
    assert decode_byte(0xE2)[1] == 3
    assert decode_byte(0xF0)[1] == 4
    assert decode_byte(0xF8)[1] == 5


def test_validate():
    assert validate(0x41, 1) == (0x41, 1)
    assert validate(0x20AC, 3) == (0x20AC, 3)
    assert validate(0xD800, 3) == (INVALID, 3)
    assert validate(0x41, 2) == (INVALID, 3)


def test_next_rune_skips_continuation_bytes():
    data = "a\u00e9 b".encode()
    assert next_rune(data, len(data), -1) == len(data) - 1
    assert next_rune(data, 3, -1) == 1
    assert next_rune(data, 1, +1) == 3
    assert next_rune(data, 0, +1) == 1