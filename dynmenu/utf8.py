"""Lenient UTF-8 decoding of single characters."""

from __future__ import annotations

INVALID = 0xFFFD
MAX_SIZE = 4

_BYTE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_MIN = (0, 0, 0x80, 0x800, 0x10000)
_MAX = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)


def decode_byte(byte: int) -> tuple[int, int]:
    """Classify one byte.

    Returns the payload bits and the kind: 0 for a continuation byte,
    1 to 4 for the length of the sequence it starts, 5 for an invalid byte.
    """
    for kind, (mask, lead) in enumerate(zip(_MASK, _BYTE)):
        if byte & mask == lead:
            return byte & ~mask & 0xFF, kind
    return 0, len(_MASK)


def validate(codepoint: int, length: int) -> tuple[int, int]:
    """Replace an overlong, out-of-range or surrogate codepoint.

    Returns the codepoint, possibly replaced, and the shortest encoded
    length for it.
    """
    if not _MIN[length] <= codepoint <= _MAX[length] or 0xD800 <= codepoint <= 0xDFFF:
        codepoint = INVALID
    size = 1
    while codepoint > _MAX[size]:
        size += 1
    return codepoint, size


def decode(data: bytes) -> tuple[int, int]:
    """Decode the first character of data.

    Returns the codepoint and the number of bytes consumed. On malformed
    input the codepoint is U+FFFD; a truncated sequence consumes nothing.
    """
    if not data:
        return INVALID, 0
    value, length = decode_byte(data[0])
    if not 1 <= length <= MAX_SIZE:
        return INVALID, 1
    consumed = 1
    for byte in data[1:length]:
        part, kind = decode_byte(byte)
        value = (value << 6) | part
        if kind:
            return INVALID, consumed
        consumed += 1
    if consumed < length:
        return INVALID, 0
    codepoint, _ = validate(value, length)
    return codepoint, length


def next_rune(data: bytes, cursor: int, inc: int) -> int:
    """Return the offset of the next character start from cursor, moving by inc (+1 or -1)."""
    pos = cursor + inc
    while pos + inc >= 0 and (data[pos] if pos < len(data) else 0) & 0xC0 == 0x80:
        pos += inc
    return pos