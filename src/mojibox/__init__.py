"""mojibox — Unicode string inspection and repair.

UTF-8 decoding with maximal-subpart recovery, scrubbing, byte /
codepoint / grapheme segmentation, hex and escape codecs, behind a
layered CLI.
"""

from mojibox.api import drop, dump, iterate, length, take
from mojibox.core import (
    EscapeFormat,
    HexCase,
    HexLayout,
    UnitKind,
    chr_from_codepoints,
    decode_hex,
    encode_hex,
    escape,
    ord_characters,
    scrub,
    scrub_report,
    unescape,
    unescape_units,
)
from mojibox.version import __version__

__all__: list[str] = [
    "EscapeFormat",
    "HexCase",
    "HexLayout",
    "UnitKind",
    "__version__",
    "chr_from_codepoints",
    "decode_hex",
    "drop",
    "dump",
    "encode_hex",
    "escape",
    "iterate",
    "length",
    "ord_characters",
    "scrub",
    "scrub_report",
    "take",
    "unescape",
    "unescape_units",
]
