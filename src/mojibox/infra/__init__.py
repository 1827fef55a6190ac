"""Infrastructure layer — third-party grapheme engine integration.

This layer wraps all interaction with ``regex`` and PyICU.  Every raw
third-party exception must be caught here and re-raised as a
:class:`~mojibox.exceptions.MojiboxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from mojibox.infra.engines import ENGINE_NAMES, EngineStatus, detect_engines, resolve_engine
from mojibox.infra.icu_provider import IcuGraphemeProvider
from mojibox.infra.regex_provider import RegexGraphemeProvider

__all__: list[str] = [
    "ENGINE_NAMES",
    "EngineStatus",
    "IcuGraphemeProvider",
    "RegexGraphemeProvider",
    "detect_engines",
    "resolve_engine",
]
