"""Tests for the UTF-8 scrubber (core/scrubber.py).

One U+FFFD per maximal ill-formed subsequence, pass-through for
well-formed input, and idempotence.
"""

from __future__ import annotations

import logging

import pytest

from mojibox.core.models import ByteSpan
from mojibox.core.scrubber import scrub, scrub_bytes, scrub_report

FFFD = "�"


class TestScrubScenarios:
    def test_truncated_four_byte_sequence(self) -> None:
        assert scrub(b"\xF0\x9F\x8D") == FFFD

    def test_sushi_followed_by_ff(self) -> None:
        assert scrub(b"\xF0\x9F\x8D\xA3\xFF") == "🍣" + FFFD

    def test_overlong_nul(self) -> None:
        assert scrub(b"\xC0\x80") == FFFD * 2

    def test_encoded_surrogate(self) -> None:
        assert scrub(b"\xED\xA0\x80") == FFFD * 3

    def test_stray_continuation_mid_text(self) -> None:
        assert scrub(b"a\x80b") == f"a{FFFD}b"

    def test_empty(self) -> None:
        assert scrub(b"") == ""


class TestScrubProperties:
    @pytest.mark.parametrize("text", ["", "hello", "あいうえお🍣🍺", "👨‍💻", "é"])
    def test_well_formed_passes_through(self, text: str) -> None:
        assert scrub(text.encode()) == text

    def test_existing_replacement_characters_untouched(self) -> None:
        data = f"x{FFFD}y".encode()
        result = scrub_report(data)
        assert result.text == f"x{FFFD}y"
        assert result.replacements == 0

    def test_idempotent(self) -> None:
        once = scrub_bytes(b"\xC0\x80abc\xF0\x9F\x8D\xE2\x82")
        assert scrub_bytes(once) == once

    @pytest.mark.parametrize(
        "data",
        [
            b"\xF0\x9F\x8D",
            b"\xC0\xAF",
            b"\xED\xA0\x80",
            b"\xE0\x80\xAF",
            b"\xF4\x90\x80\x80",
            b"\x61\xF1\x80\x80\xE1\x80\xC2\x62\x80\x63\x80\xBF\x64",
        ],
    )
    def test_agrees_with_cpython_replace_handler(self, data: bytes) -> None:
        assert scrub(data) == data.decode("utf-8", errors="replace")


class TestScrubReport:
    def test_reports_invalid_spans(self) -> None:
        result = scrub_report(b"\xC0\x80ok\xF0\x9F\x8D")
        assert result.invalid_spans == (ByteSpan(0, 1), ByteSpan(1, 2), ByteSpan(4, 7))
        assert result.replacements == 3

    def test_logs_replacements_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="mojibox.core.scrubber"):
            scrub(b"\xFF")
        assert "replaced 1 invalid span" in caplog.text

    def test_scrub_bytes_is_utf8_of_scrub(self) -> None:
        assert scrub_bytes(b"\xFF") == "�".encode()
