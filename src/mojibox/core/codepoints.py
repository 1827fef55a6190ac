"""Character ↔ code point conversions (``ord`` / ``chr`` commands)."""

from __future__ import annotations

from collections.abc import Iterable

from mojibox.constants import MAX_SCALAR_VALUE, is_scalar_value
from mojibox.exceptions import InvalidCodepointError

_PREFIXES: tuple[str, ...] = ("0x", "0X", "U+", "u+")
_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")


def ord_characters(text: str, *, lower: bool = False, prefix: bool = True) -> list[str]:
    """Render each character of *text* as a hex code point.

    ``"🍣"`` becomes ``["0x1F363"]``; at least four digits are used.
    """
    spec = "04x" if lower else "04X"
    lead = "0x" if prefix else ""
    return [f"{lead}{ord(char):{spec}}" for char in text]


def parse_codepoint(token: str) -> int:
    """Parse one hex code point, with or without a ``0x`` / ``U+`` prefix.

    Raises
    ------
    InvalidCodepointError
        If *token* is not hex or is not a Unicode scalar value.
    """
    digits = token.strip()
    for candidate in _PREFIXES:
        if digits.startswith(candidate):
            digits = digits[len(candidate):]
            break
    if not digits or not _HEX_DIGITS.issuperset(digits):
        raise InvalidCodepointError(token, "not a hexadecimal number")
    value = int(digits, 16)
    if value > MAX_SCALAR_VALUE:
        raise InvalidCodepointError(token, "outside U+0000..U+10FFFF")
    if not is_scalar_value(value):
        raise InvalidCodepointError(token, "surrogate code points are not characters")
    return value


def chr_from_codepoints(tokens: Iterable[str]) -> str:
    """Join the characters named by hex *tokens* into one string."""
    return "".join(chr(parse_codepoint(token)) for token in tokens)
