"""Shared constants and configuration defaults.

Importable by any layer.  No I/O beyond reading the process
environment in :func:`default_engine`.
"""

from __future__ import annotations

import os

REPLACEMENT_CHARACTER: int = 0xFFFD
"""U+FFFD, substituted for each independently malformed unit."""

MAX_SCALAR_VALUE: int = 0x10FFFF

SURROGATE_MIN: int = 0xD800
SURROGATE_MAX: int = 0xDFFF

HIGH_SURROGATE_MIN: int = 0xD800
HIGH_SURROGATE_MAX: int = 0xDBFF
LOW_SURROGATE_MIN: int = 0xDC00
LOW_SURROGATE_MAX: int = 0xDFFF

SUPPLEMENTARY_MIN: int = 0x10000
"""First scalar value that needs a surrogate pair in UTF-16."""

BUILTIN_DEFAULT_ENGINE: str = "regex"

ENGINE_ENV_VAR: str = "MOJIBOX_ENGINE"
"""Environment variable overriding the default grapheme engine."""


def is_scalar_value(value: int) -> bool:
    """Return ``True`` for code points outside the surrogate range."""
    return 0 <= value <= MAX_SCALAR_VALUE and not (
        SURROGATE_MIN <= value <= SURROGATE_MAX
    )


def default_engine() -> str:
    """Return the grapheme engine used when none is given explicitly.

    ``$MOJIBOX_ENGINE`` wins over the built-in default; an empty value
    is ignored.
    """
    configured = os.environ.get(ENGINE_ENV_VAR, "").strip()
    return configured or BUILTIN_DEFAULT_ENGINE
