"""Unicode escape / unescape engine.

Escaping
--------
* default format: one ``\\u{H+}`` token per scalar value.
* JSON format: ``\\uHHHH`` per UTF-16 code unit, so scalar values
  ``>= U+10000`` become a surrogate pair.

Unescaping
----------
Both token styles may be mixed freely in one text; anything that is not
a ``\\u`` escape passes through unchanged.  ``\\uHHHH`` code units are
combined in textual order.  Malformed units never abort the pass: each
offending unit becomes one U+FFFD and processing continues.  The
reason for every replacement is kept in the
:class:`~mojibox.core.models.Replacement` outcome.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from mojibox.constants import (
    HIGH_SURROGATE_MAX,
    HIGH_SURROGATE_MIN,
    LOW_SURROGATE_MAX,
    LOW_SURROGATE_MIN,
    MAX_SCALAR_VALUE,
    SUPPLEMENTARY_MIN,
    is_scalar_value,
)
from mojibox.core.models import (
    EscapeErrorKind,
    EscapeFormat,
    HexCase,
    Replacement,
    UnescapedScalar,
    UnescapeOutcome,
)
from mojibox.exceptions import InvalidEscapeTokenError

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
_ESCAPE_PREFIX: str = "\\u"


# ---------------------------------------------------------------------------
# Surrogate arithmetic
# ---------------------------------------------------------------------------

def _is_high(unit: int) -> bool:
    return HIGH_SURROGATE_MIN <= unit <= HIGH_SURROGATE_MAX


def _is_low(unit: int) -> bool:
    return LOW_SURROGATE_MIN <= unit <= LOW_SURROGATE_MAX


def split_surrogates(value: int) -> tuple[int, int]:
    """Return the (high, low) UTF-16 surrogate pair for a supplementary value."""
    offset = value - SUPPLEMENTARY_MIN
    return HIGH_SURROGATE_MIN + (offset >> 10), LOW_SURROGATE_MIN + (offset & 0x3FF)


def combine_surrogates(high: int, low: int) -> int:
    """Inverse of :func:`split_surrogates`."""
    return SUPPLEMENTARY_MIN + ((high - HIGH_SURROGATE_MIN) << 10) + (low - LOW_SURROGATE_MIN)


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------

def escape(
    scalars: Iterable[int],
    fmt: EscapeFormat = EscapeFormat.DEFAULT,
    case: HexCase = HexCase.UPPER,
) -> str:
    """Escape every scalar value in *scalars*.

    Raises
    ------
    ValueError
        If a value is a surrogate or outside ``[0, 0x10FFFF]``.
    """
    hex_spec = "X" if case is HexCase.UPPER else "x"
    tokens: list[str] = []
    for value in scalars:
        if not is_scalar_value(value):
            raise ValueError(f"not a Unicode scalar value: {value:#x}")
        if fmt is EscapeFormat.DEFAULT:
            tokens.append(f"\\u{{{value:{hex_spec}}}}")
        elif value < SUPPLEMENTARY_MIN:
            tokens.append(f"\\u{value:04{hex_spec}}")
        else:
            high, low = split_surrogates(value)
            tokens.append(f"\\u{high:04{hex_spec}}\\u{low:04{hex_spec}}")
    return "".join(tokens)


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------

class _TokenKind(Enum):
    LITERAL = "literal"
    SCALAR = "scalar"        # \u{H+}
    CODE_UNIT = "code unit"  # \uHHHH
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class _Token:
    kind: _TokenKind
    value: int
    position: int


def _scan_hex(text: str, start: int, limit: int) -> int:
    """Return the end of the hex-digit run starting at *start*."""
    end = start
    while end < limit and text[end] in _HEX_DIGITS:
        end += 1
    return end


def _tokenize(text: str) -> Iterator[_Token]:
    pos = 0
    size = len(text)
    while pos < size:
        if not text.startswith(_ESCAPE_PREFIX, pos):
            yield _Token(_TokenKind.LITERAL, ord(text[pos]), pos)
            pos += 1
            continue

        body = pos + len(_ESCAPE_PREFIX)
        if body < size and text[body] == "{":
            digits_end = _scan_hex(text, body + 1, size)
            closed = digits_end < size and text[digits_end] == "}"
            if closed and digits_end > body + 1:
                value = int(text[body + 1:digits_end], 16)
                yield _Token(_TokenKind.SCALAR, value, pos)
                pos = digits_end + 1
            else:
                yield _Token(_TokenKind.MALFORMED, 0, pos)
                pos = digits_end + 1 if closed else digits_end
            continue

        digits_end = _scan_hex(text, body, min(body + 4, size))
        if digits_end - body == 4:
            yield _Token(_TokenKind.CODE_UNIT, int(text[body:digits_end], 16), pos)
        else:
            yield _Token(_TokenKind.MALFORMED, 0, pos)
        pos = digits_end


# ---------------------------------------------------------------------------
# Unescaping
# ---------------------------------------------------------------------------

def _resolve_scalar_token(token: _Token) -> UnescapeOutcome:
    value = token.value
    if value > MAX_SCALAR_VALUE:
        return Replacement(EscapeErrorKind.OUT_OF_RANGE_CODEPOINT, token.position)
    if _is_high(value):
        return Replacement(EscapeErrorKind.LONE_HIGH_SURROGATE, token.position)
    if _is_low(value):
        return Replacement(EscapeErrorKind.LONE_LOW_SURROGATE, token.position)
    return UnescapedScalar(value, token.position)


def unescape_units(text: str) -> list[UnescapeOutcome]:
    """Unescape *text* into one outcome per produced unit."""
    tokens = list(_tokenize(text))

    def code_unit_at(index: int) -> int | None:
        if index < len(tokens) and tokens[index].kind is _TokenKind.CODE_UNIT:
            return tokens[index].value
        return None

    outcomes: list[UnescapeOutcome] = []
    reversed_next = False
    index = 0
    while index < len(tokens):
        token = tokens[index]
        reversed_here, reversed_next = reversed_next, False

        if token.kind is _TokenKind.LITERAL:
            outcomes.append(UnescapedScalar(token.value, token.position))
        elif token.kind is _TokenKind.MALFORMED:
            outcomes.append(Replacement(EscapeErrorKind.MALFORMED_TOKEN, token.position))
        elif token.kind is _TokenKind.SCALAR:
            outcomes.append(_resolve_scalar_token(token))
        elif _is_high(token.value):
            following = code_unit_at(index + 1)
            if following is not None and _is_low(following):
                outcomes.append(
                    UnescapedScalar(combine_surrogates(token.value, following), token.position)
                )
                index += 2
                continue
            kind = (
                EscapeErrorKind.REVERSED_SURROGATE_PAIR
                if reversed_here
                else EscapeErrorKind.LONE_HIGH_SURROGATE
            )
            outcomes.append(Replacement(kind, token.position))
        elif _is_low(token.value):
            following = code_unit_at(index + 1)
            after = code_unit_at(index + 2)
            # A low unit followed by a high unit that does not pair forward.
            if following is not None and _is_high(following) and not (
                after is not None and _is_low(after)
            ):
                reversed_next = True
                outcomes.append(
                    Replacement(EscapeErrorKind.REVERSED_SURROGATE_PAIR, token.position)
                )
            else:
                outcomes.append(
                    Replacement(EscapeErrorKind.LONE_LOW_SURROGATE, token.position)
                )
        else:
            outcomes.append(UnescapedScalar(token.value, token.position))
        index += 1

    return outcomes


def unescape(text: str, *, strict: bool = False) -> str:
    """Unescape *text*, replacing each malformed unit with U+FFFD.

    Raises
    ------
    InvalidEscapeTokenError
        Only when *strict* is set, for the first malformed unit.
    """
    outcomes = unescape_units(text)
    if strict:
        for outcome in outcomes:
            if isinstance(outcome, Replacement):
                raise InvalidEscapeTokenError(outcome.kind, outcome.position)
    return "".join(chr(outcome.value) for outcome in outcomes)
