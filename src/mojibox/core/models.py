"""Domain models for mojibox.

All models are **frozen** dataclasses or enums: immutable value objects
with no behaviour beyond data access and small derived views.  They carry
zero I/O and no dependencies on external packages.

Tagged variants are plain unions of dataclasses (``Unit``,
``DecodeOutcome``, ``UnescapeOutcome``) so callers can dispatch with
``isinstance`` or ``match``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from mojibox.constants import REPLACEMENT_CHARACTER


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class UnitKind(str, Enum):
    """Granularity at which a buffer is partitioned."""

    BYTE = "byte"
    CODEPOINT = "codepoint"
    GRAPHEME = "grapheme"


class HexLayout(str, Enum):
    """Textual layout of a hex dump."""

    CONTINUOUS = "default"
    SPACED = "spaced"
    ESCAPED = "escaped"


class HexCase(str, Enum):
    UPPER = "upper"
    LOWER = "lower"


class EscapeFormat(str, Enum):
    """``\\u{H+}`` per scalar value, or JSON-style ``\\uHHHH`` code units."""

    DEFAULT = "default"
    JSON = "json"


class EscapeErrorKind(str, Enum):
    """Why an escape unit was replaced by U+FFFD."""

    LONE_HIGH_SURROGATE = "lone high surrogate"
    LONE_LOW_SURROGATE = "lone low surrogate"
    REVERSED_SURROGATE_PAIR = "reversed surrogate pair"
    OUT_OF_RANGE_CODEPOINT = "code point out of range"
    MALFORMED_TOKEN = "malformed escape token"


# ---------------------------------------------------------------------------
# Spans and decode outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ByteSpan:
    """Half-open ``[start, end)`` range into the original byte buffer."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class DecodedScalar:
    """A well-formed scalar value and the bytes it was decoded from."""

    value: int
    span: ByteSpan


@dataclass(frozen=True, slots=True)
class InvalidSpan:
    """A maximal ill-formed subsequence."""

    span: ByteSpan


DecodeOutcome = Union[DecodedScalar, InvalidSpan]


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ByteUnit:
    value: int
    span: ByteSpan

    @property
    def text(self) -> str:
        """Printable ASCII as itself, anything else as ``\\xHH``."""
        if 0x20 <= self.value < 0x7F:
            return chr(self.value)
        return f"\\x{self.value:02X}"


@dataclass(frozen=True, slots=True)
class ScalarUnit:
    value: int
    span: ByteSpan

    @property
    def text(self) -> str:
        return chr(self.value)


@dataclass(frozen=True, slots=True)
class GraphemeUnit:
    """An extended grapheme cluster: one or more scalar values."""

    scalars: tuple[int, ...]
    span: ByteSpan

    @property
    def text(self) -> str:
        return "".join(map(chr, self.scalars))


Unit = Union[ByteUnit, ScalarUnit, GraphemeUnit]


# ---------------------------------------------------------------------------
# Unescape outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UnescapedScalar:
    """A scalar value produced from an escape token or a literal character."""

    value: int
    position: int
    """Character offset in the input text where the producing text starts."""


@dataclass(frozen=True, slots=True)
class Replacement:
    """One U+FFFD standing in for one malformed escape unit."""

    kind: EscapeErrorKind
    position: int

    @property
    def value(self) -> int:
        return REPLACEMENT_CHARACTER


UnescapeOutcome = Union[UnescapedScalar, Replacement]


# ---------------------------------------------------------------------------
# Scrub and dump results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScrubResult:
    """Repaired text plus the spans that were replaced."""

    text: str
    invalid_spans: tuple[ByteSpan, ...]

    @property
    def replacements(self) -> int:
        return len(self.invalid_spans)


@dataclass(frozen=True, slots=True)
class CharInfo:
    char: str
    codepoint: int
    name: str

    @property
    def label(self) -> str:
        """``U+XXXX`` notation, at least four digits."""
        return f"U+{self.codepoint:04X}"


@dataclass(frozen=True, slots=True)
class ClusterInfo:
    """One grapheme cluster as reported by ``dump``."""

    index: int
    text: str
    span: ByteSpan
    chars: tuple[CharInfo, ...]
