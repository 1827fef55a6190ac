"""Engine-aware convenience surface.

Each function resolves the grapheme engine by identifier and delegates
to a fresh :class:`~mojibox.core.segmenter.UnitSegmenter`.  This is
the only module outside ``cli`` that wires ``core`` to ``infra``.
"""

from __future__ import annotations

from collections.abc import Iterator

from mojibox.core.models import ClusterInfo, Unit, UnitKind
from mojibox.core.segmenter import NameLookup, UnitSegmenter, unicode_name
from mojibox.infra.engines import resolve_engine

Buffer = bytes | bytearray | memoryview


def segmenter(engine: str | None = None) -> UnitSegmenter:
    """Build a segmenter for *engine* (default engine when ``None``)."""
    return UnitSegmenter(resolve_engine(engine))


def iterate(buffer: Buffer, kind: UnitKind, engine: str | None = None) -> Iterator[Unit]:
    return segmenter(engine).iterate(buffer, kind)


def length(buffer: Buffer, kind: UnitKind, engine: str | None = None) -> int:
    return segmenter(engine).length(buffer, kind)


def take(buffer: Buffer, kind: UnitKind, n: int, engine: str | None = None) -> list[Unit]:
    return segmenter(engine).take(buffer, kind, n)


def drop(buffer: Buffer, kind: UnitKind, n: int, engine: str | None = None) -> list[Unit]:
    return segmenter(engine).drop(buffer, kind, n)


def dump(
    buffer: Buffer,
    engine: str | None = None,
    name_lookup: NameLookup = unicode_name,
) -> tuple[ClusterInfo, ...]:
    return segmenter(engine).dump(buffer, name_lookup)
