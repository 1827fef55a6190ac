"""PyICU-backed :class:`~mojibox.core.protocols.GraphemeBoundaryProvider`.

This module is the **only** place in the codebase that imports ``icu``.
PyICU is optional: when it is missing the ``icu`` engine identifier
resolves to :class:`~mojibox.exceptions.UnsupportedEngineError` instead
of falling back to another engine.

ICU's break iterator works on UTF-16, so its offsets are mapped back to
offsets into the scalar-value sequence.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mojibox.constants import SUPPLEMENTARY_MIN
from mojibox.exceptions import MojiboxError, UnsupportedEngineError


class IcuGraphemeProvider:
    """Grapheme boundaries from ICU's character break iterator."""

    name: str = "icu"

    def __init__(self) -> None:
        try:
            import icu
        except ModuleNotFoundError as exc:
            raise UnsupportedEngineError(
                self.name,
                hint="PyICU is not installed. Install with: pip install PyICU",
            ) from exc
        except ImportError as exc:
            # PyICU is present but its native ICU libraries failed to load.
            raise UnsupportedEngineError(
                self.name,
                hint=f"PyICU could not be loaded ({exc}). "
                "Reinstall PyICU against the system ICU.",
            ) from exc
        self._icu: Any = icu

    @staticmethod
    def _utf16_index(scalars: Sequence[int]) -> dict[int, int]:
        """Map each UTF-16 offset that starts a scalar to the scalar's index."""
        mapping: dict[int, int] = {}
        offset = 0
        for index, value in enumerate(scalars):
            mapping[offset] = index
            offset += 2 if value >= SUPPLEMENTARY_MIN else 1
        mapping[offset] = len(scalars)
        return mapping

    def segment_graphemes(self, scalars: Sequence[int]) -> list[int]:
        if not scalars:
            return [0]
        to_scalar = self._utf16_index(scalars)

        try:
            iterator = self._icu.BreakIterator.createCharacterInstance(
                self._icu.Locale.getRoot(),
            )
            iterator.setText("".join(map(chr, scalars)))
            utf16_offsets = list(iterator)
        except self._icu.ICUError as exc:
            raise MojiboxError(f"ICU segmentation failed: {exc}") from exc

        boundaries = [0]
        for utf16_offset in utf16_offsets:
            index = to_scalar.get(utf16_offset)
            if index is None:
                raise MojiboxError(
                    f"ICU reported a boundary inside a surrogate pair ({utf16_offset}).",
                )
            if index != boundaries[-1]:
                boundaries.append(index)
        return boundaries
