"""Grapheme engine registry.

A fixed, closed set of engine identifiers maps to implementations of
:class:`~mojibox.core.protocols.GraphemeBoundaryProvider`.  An unknown
identifier, or a known one whose backing library is missing, raises
:class:`~mojibox.exceptions.UnsupportedEngineError`.  There is no
silent fallback to another engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from mojibox.constants import default_engine
from mojibox.core.protocols import GraphemeBoundaryProvider
from mojibox.exceptions import UnsupportedEngineError
from mojibox.infra.icu_provider import IcuGraphemeProvider
from mojibox.infra.regex_provider import RegexGraphemeProvider

logger = logging.getLogger(__name__)

_ENGINE_FACTORIES: Mapping[str, Callable[[], GraphemeBoundaryProvider]] = MappingProxyType(
    {
        RegexGraphemeProvider.name: RegexGraphemeProvider,
        IcuGraphemeProvider.name: IcuGraphemeProvider,
    }
)

ENGINE_NAMES: tuple[str, ...] = tuple(_ENGINE_FACTORIES)
"""Every identifier accepted by :func:`resolve_engine`."""


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_engine(name: str | None = None) -> GraphemeBoundaryProvider:
    """Return the provider registered under *name*.

    ``None`` selects :func:`~mojibox.constants.default_engine`.
    Identifiers are case-insensitive.

    Raises
    ------
    UnsupportedEngineError
        If *name* is unknown or its library is not installed.
    """
    requested = name if name is not None else default_engine()
    factory = _ENGINE_FACTORIES.get(requested.strip().lower())
    if factory is None:
        raise UnsupportedEngineError(
            requested,
            hint=f"Available engines: {', '.join(ENGINE_NAMES)}",
        )
    provider = factory()
    logger.debug("resolved grapheme engine %r", provider.name)
    return provider


# ---------------------------------------------------------------------------
# Availability probe
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EngineStatus:
    """Result of probing one grapheme engine.

    Attributes
    ----------
    name : str
        Engine identifier.
    available : bool
        Whether the engine's backing library could be loaded.
    detail : str
        ``"available"`` or the reason the engine is unusable.
    """

    name: str
    available: bool
    detail: str


def detect_engines() -> tuple[EngineStatus, ...]:
    """Probe every registered engine without raising."""
    statuses: list[EngineStatus] = []
    for name in ENGINE_NAMES:
        try:
            resolve_engine(name)
        except UnsupportedEngineError as exc:
            statuses.append(EngineStatus(name, False, exc.hint or str(exc)))
        else:
            statuses.append(EngineStatus(name, True, "available"))
    return tuple(statuses)
