"""Core layer — pure Unicode transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from mojibox.core.codepoints import chr_from_codepoints, ord_characters, parse_codepoint
from mojibox.core.decoder import decode, decode_strict, first_invalid_span, iter_decode
from mojibox.core.escape import escape, unescape, unescape_units
from mojibox.core.hex_codec import decode_hex, detect_layout, encode_hex
from mojibox.core.models import (
    ByteSpan,
    ByteUnit,
    CharInfo,
    ClusterInfo,
    DecodedScalar,
    EscapeErrorKind,
    EscapeFormat,
    GraphemeUnit,
    HexCase,
    HexLayout,
    InvalidSpan,
    Replacement,
    ScalarUnit,
    ScrubResult,
    UnescapedScalar,
    UnitKind,
)
from mojibox.core.protocols import GraphemeBoundaryProvider
from mojibox.core.scrubber import scrub, scrub_bytes, scrub_report
from mojibox.core.segmenter import UnitSegmenter

__all__: list[str] = [
    "ByteSpan",
    "ByteUnit",
    "CharInfo",
    "ClusterInfo",
    "DecodedScalar",
    "EscapeErrorKind",
    "EscapeFormat",
    "GraphemeBoundaryProvider",
    "GraphemeUnit",
    "HexCase",
    "HexLayout",
    "InvalidSpan",
    "Replacement",
    "ScalarUnit",
    "ScrubResult",
    "UnescapedScalar",
    "UnitKind",
    "UnitSegmenter",
    "chr_from_codepoints",
    "decode",
    "decode_hex",
    "decode_strict",
    "detect_layout",
    "encode_hex",
    "escape",
    "first_invalid_span",
    "iter_decode",
    "ord_characters",
    "parse_codepoint",
    "scrub",
    "scrub_bytes",
    "scrub_report",
    "unescape",
    "unescape_units",
]
