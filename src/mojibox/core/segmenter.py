"""Unit segmenter — one buffer, three interchangeable partitionings.

The segmenter exposes the same four operations (``iterate``,
``length``, ``take``, ``drop``) over bytes, scalar values and extended
grapheme clusters.  Grapheme boundaries come from a
:class:`~mojibox.core.protocols.GraphemeBoundaryProvider` injected at
construction time, keeping the core free of engine imports.

Guarantees
----------
* ``take(n) + drop(n)`` reproduces ``iterate()`` exactly, for any ``n >= 0``.
* ``length(BYTE) >= length(CODEPOINT) >= length(GRAPHEME)``.
* Codepoint and grapheme kinds refuse ill-formed UTF-8 with
  :class:`~mojibox.exceptions.InvalidUtf8Error`; they never repair.
* Nothing is cached between calls.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterator, Sequence
from itertools import islice, pairwise

from mojibox.core.decoder import decode_strict
from mojibox.core.models import (
    ByteSpan,
    ByteUnit,
    CharInfo,
    ClusterInfo,
    DecodedScalar,
    GraphemeUnit,
    ScalarUnit,
    Unit,
    UnitKind,
)
from mojibox.core.protocols import GraphemeBoundaryProvider
from mojibox.exceptions import MojiboxError

NameLookup = Callable[[str], str]


def unicode_name(char: str) -> str:
    """Return the Unicode character name, or ``"<unnamed>"``."""
    return unicodedata.name(char, "") or "<unnamed>"


class UnitSegmenter:
    """Stateless segmenter over byte buffers.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`GraphemeBoundaryProvider`
        protocol.  Only consulted for :attr:`UnitKind.GRAPHEME`.
    """

    def __init__(self, provider: GraphemeBoundaryProvider) -> None:
        self._provider: GraphemeBoundaryProvider = provider

    @property
    def engine(self) -> str:
        return self._provider.name

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def iterate(
        self,
        buffer: bytes | bytearray | memoryview,
        kind: UnitKind,
    ) -> Iterator[Unit]:
        """Return a fresh iterator over the units of *buffer*.

        Well-formedness is checked before the iterator is returned, so
        an ill-formed buffer raises here rather than midway through.

        Raises
        ------
        InvalidUtf8Error
            For codepoint/grapheme kinds when *buffer* is not UTF-8.
        """
        data = bytes(buffer)
        if kind is UnitKind.BYTE:
            return self._iter_bytes(data)
        scalars = decode_strict(data)
        if kind is UnitKind.CODEPOINT:
            return self._iter_scalars(scalars)
        return self._iter_graphemes(scalars)

    def length(self, buffer: bytes | bytearray | memoryview, kind: UnitKind) -> int:
        """Count the units of *buffer*."""
        return sum(1 for _ in self.iterate(buffer, kind))

    def take(
        self,
        buffer: bytes | bytearray | memoryview,
        kind: UnitKind,
        n: int,
    ) -> list[Unit]:
        """Return the first ``min(n, length)`` units."""
        self._check_count(n)
        return list(islice(self.iterate(buffer, kind), n))

    def drop(
        self,
        buffer: bytes | bytearray | memoryview,
        kind: UnitKind,
        n: int,
    ) -> list[Unit]:
        """Return the units left after skipping ``min(n, length)``."""
        self._check_count(n)
        return list(islice(self.iterate(buffer, kind), n, None))

    def dump(
        self,
        buffer: bytes | bytearray | memoryview,
        name_lookup: NameLookup = unicode_name,
    ) -> tuple[ClusterInfo, ...]:
        """Describe every grapheme cluster and the scalars inside it."""
        clusters: list[ClusterInfo] = []
        units = self._iter_graphemes(decode_strict(buffer))
        for index, unit in enumerate(units):
            chars = tuple(
                CharInfo(char=chr(value), codepoint=value, name=name_lookup(chr(value)))
                for value in unit.scalars
            )
            clusters.append(
                ClusterInfo(index=index, text=unit.text, span=unit.span, chars=chars)
            )
        return tuple(clusters)

    # ------------------------------------------------------------------
    # Per-kind generators
    # ------------------------------------------------------------------

    @staticmethod
    def _iter_bytes(data: bytes) -> Iterator[Unit]:
        for offset, value in enumerate(data):
            yield ByteUnit(value=value, span=ByteSpan(offset, offset + 1))

    @staticmethod
    def _iter_scalars(scalars: Sequence[DecodedScalar]) -> Iterator[Unit]:
        for scalar in scalars:
            yield ScalarUnit(value=scalar.value, span=scalar.span)

    def _iter_graphemes(
        self, scalars: Sequence[DecodedScalar],
    ) -> Iterator[GraphemeUnit]:
        if not scalars:
            return
        values = [scalar.value for scalar in scalars]
        boundaries = self._boundaries(values)
        for start, end in pairwise(boundaries):
            yield GraphemeUnit(
                scalars=tuple(values[start:end]),
                span=ByteSpan(scalars[start].span.start, scalars[end - 1].span.end),
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _boundaries(self, values: Sequence[int]) -> list[int]:
        """Ask the provider for boundaries and check the contract."""
        boundaries = list(self._provider.segment_graphemes(values))
        well_formed = (
            len(boundaries) >= 2
            and boundaries[0] == 0
            and boundaries[-1] == len(values)
            and all(a < b for a, b in pairwise(boundaries))
        )
        if not well_formed:
            raise MojiboxError(
                f"Engine {self._provider.name!r} returned invalid cluster boundaries.",
            )
        return boundaries

    @staticmethod
    def _check_count(n: int) -> None:
        if n < 0:
            raise ValueError(f"unit count must be >= 0, got {n}")
