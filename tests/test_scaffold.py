"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from mojibox import __version__
from mojibox.cli import exit_codes
from mojibox.cli.app import main
from mojibox.core.models import ByteSpan, EscapeErrorKind
from mojibox.exceptions import (
    EnvironmentError,
    InvalidCodepointError,
    InvalidEscapeTokenError,
    InvalidHexError,
    InvalidUtf8Error,
    MojiboxError,
    UnsupportedEngineError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidUtf8Error,
            UnsupportedEngineError,
            InvalidHexError,
            InvalidEscapeTokenError,
            InvalidCodepointError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[MojiboxError]
    ) -> None:
        assert issubclass(exc_class, MojiboxError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(MojiboxError, Exception)

    def test_hint_is_stored(self) -> None:
        err = MojiboxError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = MojiboxError("boom")
        assert err.hint is None

    def test_invalid_utf8_carries_span(self) -> None:
        err = InvalidUtf8Error(ByteSpan(3, 5))
        assert err.span == ByteSpan(3, 5)
        assert "3..5" in str(err)
        assert err.hint is not None and "scrub" in err.hint

    def test_unsupported_engine_carries_name(self) -> None:
        err = UnsupportedEngineError("icu4x")
        assert err.name == "icu4x"
        assert "icu4x" in str(err)

    def test_invalid_hex_carries_position_and_reason(self) -> None:
        err = InvalidHexError(7, "odd number of hex digits")
        assert err.position == 7
        assert err.reason == "odd number of hex digits"

    def test_invalid_escape_carries_kind(self) -> None:
        err = InvalidEscapeTokenError(EscapeErrorKind.LONE_HIGH_SURROGATE, 0)
        assert err.kind is EscapeErrorKind.LONE_HIGH_SURROGATE
        assert err.position == 0


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    def test_usage_error_matches_argparse(self) -> None:
        from mojibox.cli.app import main

        with pytest.raises(SystemExit) as exc_info:
            main(["no-such-command"])
        assert exc_info.value.code == exit_codes.USAGE_ERROR


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "mojibox" in capsys.readouterr().out

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_help_mentions_purpose(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--help"])
        assert "Unicode string manipulation" in capsys.readouterr().out

    def test_doctor_routes_to_run_doctor(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from mojibox.cli import doctor

        monkeypatch.setattr(doctor, "run_doctor", lambda: exit_codes.SUCCESS)
        assert main(["doctor"]) == exit_codes.SUCCESS
