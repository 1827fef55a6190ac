"""Reversible hex codec with layout auto-detection.

Layouts
-------
* continuous — ``E38182``
* spaced     — ``E3 81 82``
* escaped    — ``\\xE3\\x81\\x82``

:func:`decode_hex` detects the layout, accepts either digit case and
fails loudly with :class:`~mojibox.exceptions.InvalidHexError`; it never
returns a partial result.
"""

from __future__ import annotations

from mojibox.core.models import HexCase, HexLayout
from mojibox.exceptions import InvalidHexError

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
_ESCAPE_PREFIXES: tuple[str, ...] = ("\\x", "\\X")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode_hex(
    buffer: bytes | bytearray | memoryview,
    layout: HexLayout = HexLayout.CONTINUOUS,
    case: HexCase = HexCase.UPPER,
) -> str:
    """Render *buffer* as hex text in the requested layout and case."""
    spec = "02X" if case is HexCase.UPPER else "02x"
    pairs = [format(value, spec) for value in bytes(buffer)]
    if layout is HexLayout.SPACED:
        return " ".join(pairs)
    if layout is HexLayout.ESCAPED:
        return "".join(f"\\x{pair}" for pair in pairs)
    return "".join(pairs)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def detect_layout(text: str) -> HexLayout:
    """Guess the layout of *text*.

    ``\\x`` anywhere means escaped; whitespace between digits means
    spaced; anything else is treated as continuous.
    """
    if any(prefix in text for prefix in _ESCAPE_PREFIXES):
        return HexLayout.ESCAPED
    if any(char.isspace() for char in text.strip()):
        return HexLayout.SPACED
    return HexLayout.CONTINUOUS


def decode_hex(text: str) -> bytes:
    """Decode hex *text* in any supported layout.

    Raises
    ------
    InvalidHexError
        On an odd digit count, a non-hex character, or an escape that is
        not followed by exactly two hex digits.
    """
    layout = detect_layout(text)
    if layout is HexLayout.ESCAPED:
        return _decode_escaped(text)
    if layout is HexLayout.SPACED:
        return _decode_spaced(text)
    return _decode_run(text, 0, len(text))


def _decode_run(text: str, start: int, end: int) -> bytes:
    """Decode ``text[start:end]`` ignoring surrounding whitespace."""
    digits: list[str] = []
    last_digit = start
    for pos in range(start, end):
        char = text[pos]
        if char.isspace():
            continue
        if char not in _HEX_DIGITS:
            raise InvalidHexError(pos, f"non-hex character {char!r}")
        digits.append(char)
        last_digit = pos
    if len(digits) % 2:
        raise InvalidHexError(last_digit, "odd number of hex digits")
    return bytes.fromhex("".join(digits))


def _decode_spaced(text: str) -> bytes:
    """Decode whitespace-separated groups, each of an even digit count."""
    out = bytearray()
    pos = 0
    size = len(text)
    while pos < size:
        if text[pos].isspace():
            pos += 1
            continue
        group_end = pos
        while group_end < size and not text[group_end].isspace():
            group_end += 1
        out += _decode_run(text, pos, group_end)
        pos = group_end
    return bytes(out)


def _decode_escaped(text: str) -> bytes:
    out = bytearray()
    pos = 0
    size = len(text)
    while pos < size:
        char = text[pos]
        if char.isspace():
            pos += 1
            continue
        if not text.startswith(_ESCAPE_PREFIXES, pos):
            raise InvalidHexError(pos, f"unexpected character {char!r} outside \\xHH escape")
        digits_start = pos + 2
        digits_end = digits_start
        while digits_end < size and text[digits_end] in _HEX_DIGITS:
            digits_end += 1
        count = digits_end - digits_start
        if count != 2:
            raise InvalidHexError(
                pos,
                f"escape must be followed by exactly two hex digits, found {count}",
            )
        out.append(int(text[digits_start:digits_end], 16))
        pos = digits_end
    return bytes(out)
