"""Custom exception hierarchy for mojibox.

All exceptions that cross layer boundaries must inherit from
:class:`MojiboxError`.  Raw third-party exceptions (e.g. from PyICU)
must NEVER propagate beyond the infrastructure layer; they must be
caught and re-raised as a typed subclass defined here.

The scrubber and the (non-strict) unescape engine repair malformed
input locally and never raise; hex decoding and codepoint/grapheme
segmentation surface a hard error instead.

Hierarchy
---------
MojiboxError
├── InvalidUtf8Error
├── UnsupportedEngineError
├── InvalidHexError
├── InvalidEscapeTokenError
├── InvalidCodepointError
└── EnvironmentError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mojibox.core.models import ByteSpan, EscapeErrorKind


class MojiboxError(Exception):
    """Base exception for all mojibox errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Decoding / segmentation -----------------------------------------------

class InvalidUtf8Error(MojiboxError):
    """Raised when an operation requiring well-formed UTF-8 meets bad bytes."""

    def __init__(self, span: ByteSpan, *, hint: str | None = None) -> None:
        super().__init__(
            f"Invalid UTF-8 sequence at bytes {span.start}..{span.end}",
            hint=hint or "Run 'mojibox scrub' to repair the input first.",
        )
        self.span: ByteSpan = span


class UnsupportedEngineError(MojiboxError):
    """Raised when a grapheme engine identifier cannot be resolved."""

    def __init__(self, name: str, *, hint: str | None = None) -> None:
        super().__init__(f"Unsupported segmentation engine: {name}", hint=hint)
        self.name: str = name


# --- Codecs ----------------------------------------------------------------

class InvalidHexError(MojiboxError):
    """Raised when hex text cannot be decoded into bytes."""

    def __init__(self, position: int, reason: str) -> None:
        super().__init__(f"Invalid hex input at position {position}: {reason}")
        self.position: int = position
        self.reason: str = reason


class InvalidEscapeTokenError(MojiboxError):
    """Raised by strict unescaping for the first malformed unit."""

    def __init__(self, kind: EscapeErrorKind, position: int) -> None:
        super().__init__(
            f"Invalid escape at position {position}: {kind.value}",
            hint="Omit --strict to replace malformed escapes with U+FFFD.",
        )
        self.kind: EscapeErrorKind = kind
        self.position: int = position


class InvalidCodepointError(MojiboxError):
    """Raised when a textual code point is not a Unicode scalar value."""

    def __init__(self, token: str, reason: str) -> None:
        super().__init__(f"Invalid code point {token!r}: {reason}")
        self.token: str = token


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(MojiboxError):
    """Raised when a required runtime dependency is not available."""
