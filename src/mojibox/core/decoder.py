"""Table-driven UTF-8 decoder with maximal-subpart error recovery.

Every byte of the input is covered by exactly one outcome: either a
:class:`~mojibox.core.models.DecodedScalar` or an
:class:`~mojibox.core.models.InvalidSpan`.  Invalid spans follow the
Unicode "maximal subpart" practice (The Unicode Standard §3.9, Table 3-7):

* A byte that can never start a sequence (``80..C1``, ``F5..FF``) is a
  one-byte invalid span.
* A valid lead byte followed by fewer admissible continuation bytes
  than it announces yields one span covering the lead byte and the
  admissible continuation bytes seen so far.  The offending byte is
  *not* part of the span; decoding restarts on it.

The admissible range of the first continuation byte depends on the
lead byte (``E0 → A0..BF``, ``ED → 80..9F``, ``F0 → 90..BF``,
``F4 → 80..8F``).  This excludes overlong forms, surrogates and values
above U+10FFFF before they are assembled, so every completed sequence
is a valid scalar value.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from mojibox.core.models import ByteSpan, DecodedScalar, DecodeOutcome, InvalidSpan
from mojibox.exceptions import InvalidUtf8Error


# ---------------------------------------------------------------------------
# Lead-byte classification table
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _LeadClass:
    continuations: int
    first_min: int
    first_max: int
    payload_mask: int


def _build_lead_table() -> tuple[_LeadClass | None, ...]:
    table: list[_LeadClass | None] = [None] * 256

    ascii_class = _LeadClass(0, 0, 0, 0x7F)
    two_byte = _LeadClass(1, 0x80, 0xBF, 0x1F)
    three_byte = _LeadClass(2, 0x80, 0xBF, 0x0F)
    four_byte = _LeadClass(3, 0x80, 0xBF, 0x07)

    for lead in range(0x00, 0x80):
        table[lead] = ascii_class
    for lead in range(0xC2, 0xE0):
        table[lead] = two_byte
    for lead in range(0xE1, 0xF0):
        table[lead] = three_byte
    for lead in range(0xF1, 0xF4):
        table[lead] = four_byte

    table[0xE0] = _LeadClass(2, 0xA0, 0xBF, 0x0F)  # overlong below U+0800
    table[0xED] = _LeadClass(2, 0x80, 0x9F, 0x0F)  # surrogates
    table[0xF0] = _LeadClass(3, 0x90, 0xBF, 0x07)  # overlong below U+10000
    table[0xF4] = _LeadClass(3, 0x80, 0x8F, 0x07)  # above U+10FFFF
    return tuple(table)


_LEAD_TABLE: tuple[_LeadClass | None, ...] = _build_lead_table()

_CONTINUATION_MIN: int = 0x80
_CONTINUATION_MAX: int = 0xBF


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def iter_decode(buffer: bytes | bytearray | memoryview) -> Iterator[DecodeOutcome]:
    """Yield decode outcomes for *buffer* in source order.

    Each call starts a fresh pass over the input, so the sequence can be
    restarted simply by calling again.
    """
    data = bytes(buffer)
    size = len(data)
    pos = 0

    while pos < size:
        lead_class = _LEAD_TABLE[data[pos]]
        if lead_class is None:
            yield InvalidSpan(ByteSpan(pos, pos + 1))
            pos += 1
            continue

        value = data[pos] & lead_class.payload_mask
        cursor = pos + 1
        low, high = lead_class.first_min, lead_class.first_max
        for _ in range(lead_class.continuations):
            if cursor >= size or not low <= data[cursor] <= high:
                break
            value = (value << 6) | (data[cursor] & 0x3F)
            cursor += 1
            low, high = _CONTINUATION_MIN, _CONTINUATION_MAX
        else:
            yield DecodedScalar(value, ByteSpan(pos, cursor))
            pos = cursor
            continue

        # Truncated or interrupted sequence: the bytes consumed so far are
        # the maximal subpart.
        yield InvalidSpan(ByteSpan(pos, cursor))
        pos = cursor


def decode(buffer: bytes | bytearray | memoryview) -> tuple[DecodeOutcome, ...]:
    """Materialise :func:`iter_decode` into a tuple."""
    return tuple(iter_decode(buffer))


def iter_decode_strict(buffer: bytes | bytearray | memoryview) -> Iterator[DecodedScalar]:
    """Yield decoded scalars, raising on the first invalid span.

    Raises
    ------
    InvalidUtf8Error
        When an ill-formed subsequence is reached.
    """
    for outcome in iter_decode(buffer):
        if isinstance(outcome, InvalidSpan):
            raise InvalidUtf8Error(outcome.span)
        yield outcome


def decode_strict(buffer: bytes | bytearray | memoryview) -> tuple[DecodedScalar, ...]:
    """Decode well-formed UTF-8 or raise :class:`InvalidUtf8Error`."""
    return tuple(iter_decode_strict(buffer))


def first_invalid_span(buffer: bytes | bytearray | memoryview) -> ByteSpan | None:
    """Return the first ill-formed span in *buffer*, or ``None``."""
    for outcome in iter_decode(buffer):
        if isinstance(outcome, InvalidSpan):
            return outcome.span
    return None
