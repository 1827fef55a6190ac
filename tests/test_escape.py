"""Tests for the escape / unescape engine (core/escape.py).

Covers both escape formats, surrogate-pair arithmetic, and the
per-unit U+FFFD recovery rules for malformed escapes.
"""

from __future__ import annotations

import pytest

from mojibox.core.escape import (
    combine_surrogates,
    escape,
    split_surrogates,
    unescape,
    unescape_units,
)
from mojibox.core.models import (
    EscapeErrorKind,
    EscapeFormat,
    HexCase,
    Replacement,
    UnescapedScalar,
)
from mojibox.exceptions import InvalidEscapeTokenError

FFFD = "�"


def _kinds(text: str) -> list[EscapeErrorKind]:
    return [unit.kind for unit in unescape_units(text) if isinstance(unit, Replacement)]


# ---------------------------------------------------------------------------
# Surrogate arithmetic
# ---------------------------------------------------------------------------

class TestSurrogates:
    def test_split_sushi(self) -> None:
        assert split_surrogates(0x1F363) == (0xD83C, 0xDF63)

    @pytest.mark.parametrize("value", [0x10000, 0x1F37A, 0x10FFFF])
    def test_combine_inverts_split(self, value: int) -> None:
        assert combine_surrogates(*split_surrogates(value)) == value


# ---------------------------------------------------------------------------
# escape
# ---------------------------------------------------------------------------

class TestEscape:
    def test_json_surrogate_pairs(self) -> None:
        assert escape([0x1F363, 0x1F37A], EscapeFormat.JSON) == "\\uD83C\\uDF63\\uD83C\\uDF7A"

    def test_json_bmp_is_four_digits(self) -> None:
        assert escape([0x41, 0x3042], EscapeFormat.JSON) == "\\u0041\\u3042"

    def test_default_format(self) -> None:
        assert escape([0x41, 0x1F363]) == "\\u{41}\\u{1F363}"

    def test_default_format_zero(self) -> None:
        assert escape([0]) == "\\u{0}"

    def test_lowercase(self) -> None:
        assert escape([0x1F363], EscapeFormat.JSON, HexCase.LOWER) == "\\ud83c\\udf63"
        assert escape([0xABC], EscapeFormat.DEFAULT, HexCase.LOWER) == "\\u{abc}"

    @pytest.mark.parametrize("value", [0xD800, 0xDFFF, 0x110000, -1])
    def test_rejects_non_scalar_values(self, value: int) -> None:
        with pytest.raises(ValueError):
            escape([value])


# ---------------------------------------------------------------------------
# unescape — well-formed
# ---------------------------------------------------------------------------

class TestUnescape:
    def test_surrogate_pair_combines(self) -> None:
        assert unescape("\\uD83C\\uDF63") == "🍣"

    def test_braced_scalar(self) -> None:
        assert unescape("\\u{1F363}\\u{41}") == "🍣A"

    def test_leading_zeros_allowed(self) -> None:
        assert unescape("\\u{000041}") == "A"

    def test_literals_pass_through(self) -> None:
        assert unescape("a\\u0042c") == "aBc"

    def test_mixed_token_styles(self) -> None:
        assert unescape("\\u{1F363}\\uD83C\\uDF7A") == "🍣🍺"

    def test_positions_are_reported(self) -> None:
        units = unescape_units("ab\\u0043")
        assert units == [
            UnescapedScalar(0x61, 0),
            UnescapedScalar(0x62, 1),
            UnescapedScalar(0x43, 2),
        ]


# ---------------------------------------------------------------------------
# unescape — recovery
# ---------------------------------------------------------------------------

class TestUnescapeRecovery:
    def test_lone_high_surrogate(self) -> None:
        assert unescape("\\uD83C") == FFFD
        assert _kinds("\\uD83C") == [EscapeErrorKind.LONE_HIGH_SURROGATE]

    def test_lone_low_surrogate(self) -> None:
        assert unescape("\\uDF63") == FFFD
        assert _kinds("\\uDF63") == [EscapeErrorKind.LONE_LOW_SURROGATE]

    def test_reversed_pair_yields_two_replacements(self) -> None:
        assert unescape("\\uDF63\\uD83C") == FFFD * 2
        assert _kinds("\\uDF63\\uD83C") == [EscapeErrorKind.REVERSED_SURROGATE_PAIR] * 2

    def test_low_before_valid_pair_is_lone(self) -> None:
        assert unescape("\\uDF63\\uD83C\\uDF63") == FFFD + "🍣"
        assert _kinds("\\uDF63\\uD83C\\uDF63") == [EscapeErrorKind.LONE_LOW_SURROGATE]

    def test_high_followed_by_high_then_low(self) -> None:
        assert unescape("\\uD83C\\uD83C\\uDF63") == FFFD + "🍣"

    def test_high_followed_by_literal(self) -> None:
        assert unescape("\\uD83Cx") == FFFD + "x"

    def test_high_followed_by_braced_low_does_not_pair(self) -> None:
        assert unescape("\\uD83C\\u{DF63}") == FFFD * 2

    def test_braced_out_of_range(self) -> None:
        assert unescape("\\u{110000}") == FFFD
        assert _kinds("\\u{110000}") == [EscapeErrorKind.OUT_OF_RANGE_CODEPOINT]

    def test_braced_surrogate(self) -> None:
        assert unescape("\\u{D800}") == FFFD
        assert _kinds("\\u{D800}") == [EscapeErrorKind.LONE_HIGH_SURROGATE]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("\\u12", FFFD),
            ("\\u12xy", FFFD + "xy"),
            ("\\u{}", FFFD),
            ("\\u{zz}", FFFD + "zz}"),
            ("\\u{41", FFFD),
            ("\\u", FFFD),
        ],
    )
    def test_malformed_tokens(self, text: str, expected: str) -> None:
        assert unescape(text) == expected
        assert _kinds(text) == [EscapeErrorKind.MALFORMED_TOKEN]

    def test_processing_continues_after_errors(self) -> None:
        assert unescape("\\u{110000}ok\\uDF63!") == f"{FFFD}ok{FFFD}!"

    def test_strict_raises_on_first_error(self) -> None:
        with pytest.raises(InvalidEscapeTokenError) as exc_info:
            unescape("ok\\uD83C", strict=True)
        assert exc_info.value.kind is EscapeErrorKind.LONE_HIGH_SURROGATE
        assert exc_info.value.position == 2

    def test_strict_accepts_valid_text(self) -> None:
        assert unescape("\\uD83C\\uDF63", strict=True) == "🍣"
