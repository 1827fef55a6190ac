"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class GraphemeBoundaryProvider(Protocol):
    """Contract for extended grapheme cluster engines (UAX #29).

    Any object exposing :attr:`name` and :meth:`segment_graphemes` with
    the correct signature satisfies this protocol structurally (no
    explicit inheritance required).
    """

    name: str
    """Engine identifier, as accepted by ``--engine``."""

    def segment_graphemes(self, scalars: Sequence[int]) -> list[int]:
        """Return cluster boundary offsets into *scalars*.

        Offsets are strictly increasing, start at ``0`` and end at
        ``len(scalars)``; an empty input yields ``[0]``.  Zero-width
        joiner sequences, regional indicator pairs and combining marks
        must never be split.

        Implementations must map all backend-specific exceptions to
        :class:`~mojibox.exceptions.MojiboxError` subclasses.
        """
        ...  # pragma: no cover
