"""UTF-8 scrubber — a total repair pass built on the decoder.

Each invalid span reported by :func:`~mojibox.core.decoder.iter_decode`
becomes exactly one U+FFFD, whatever its length.  Well-formed scalars
pass through unchanged and in order, including U+FFFD characters that
were already present, so scrubbing is idempotent.
"""

from __future__ import annotations

import logging

from mojibox.constants import REPLACEMENT_CHARACTER
from mojibox.core.decoder import iter_decode
from mojibox.core.models import ByteSpan, DecodedScalar, ScrubResult

logger = logging.getLogger(__name__)

_REPLACEMENT: str = chr(REPLACEMENT_CHARACTER)


def scrub_report(buffer: bytes | bytearray | memoryview) -> ScrubResult:
    """Repair *buffer* and report which byte spans were replaced."""
    pieces: list[str] = []
    invalid: list[ByteSpan] = []
    for outcome in iter_decode(buffer):
        if isinstance(outcome, DecodedScalar):
            pieces.append(chr(outcome.value))
        else:
            pieces.append(_REPLACEMENT)
            invalid.append(outcome.span)

    if invalid:
        logger.debug(
            "scrub replaced %d invalid span(s) in %d byte(s)",
            len(invalid),
            len(buffer),
        )
    return ScrubResult(text="".join(pieces), invalid_spans=tuple(invalid))


def scrub(buffer: bytes | bytearray | memoryview) -> str:
    """Return *buffer* as well-formed text.  Never raises."""
    return scrub_report(buffer).text


def scrub_bytes(buffer: bytes | bytearray | memoryview) -> bytes:
    """Like :func:`scrub` but returns the repaired UTF-8 bytes."""
    return scrub(buffer).encode("utf-8")
