"""``regex``-backed :class:`~mojibox.core.protocols.GraphemeBoundaryProvider`.

This module is the **only** place in the codebase that imports
``regex``.  Its ``\\X`` pattern matches one extended grapheme cluster
per UAX #29.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mojibox.exceptions import UnsupportedEngineError


class RegexGraphemeProvider:
    """Grapheme boundaries from the third-party ``regex`` module.

    Usage::

        provider = RegexGraphemeProvider()
        provider.segment_graphemes([0x1F468, 0x200D, 0x1F4BB])  # [0, 3]

    This class satisfies the
    :class:`~mojibox.core.protocols.GraphemeBoundaryProvider` protocol
    structurally, with no explicit inheritance required.
    """

    name: str = "regex"

    def __init__(self) -> None:
        try:
            import regex
        except ImportError as exc:
            raise UnsupportedEngineError(
                self.name,
                hint="The regex package is not installed. Install with: pip install regex",
            ) from exc
        self._pattern: Any = regex.compile(r"\X")

    def segment_graphemes(self, scalars: Sequence[int]) -> list[int]:
        text = "".join(map(chr, scalars))
        boundaries = [0]
        boundaries.extend(match.end() for match in self._pattern.finditer(text))
        return boundaries
