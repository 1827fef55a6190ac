"""Tests for the engine-aware convenience functions (api.py)."""

from __future__ import annotations

import pytest

import mojibox
from mojibox.constants import ENGINE_ENV_VAR
from mojibox.core.models import UnitKind
from mojibox.exceptions import UnsupportedEngineError

SAMPLE = "\U0001F1EF\U0001F1F5a\u304b\u3099".encode()


class TestApi:
    def test_length_per_kind(self) -> None:
        assert mojibox.length(SAMPLE, UnitKind.BYTE) == 15
        assert mojibox.length(SAMPLE, UnitKind.CODEPOINT) == 5
        assert mojibox.length(SAMPLE, UnitKind.GRAPHEME) == 3

    def test_iterate(self) -> None:
        texts = [unit.text for unit in mojibox.iterate(SAMPLE, UnitKind.GRAPHEME)]
        assert texts == ["\U0001F1EF\U0001F1F5", "a", "\u304b\u3099"]

    def test_take_and_drop(self) -> None:
        taken = mojibox.take(SAMPLE, UnitKind.GRAPHEME, 1)
        dropped = mojibox.drop(SAMPLE, UnitKind.GRAPHEME, 1)
        assert [unit.text for unit in taken] == ["\U0001F1EF\U0001F1F5"]
        assert [unit.text for unit in dropped] == ["a", "\u304b\u3099"]

    def test_dump_with_custom_name_lookup(self) -> None:
        clusters = mojibox.dump(b"ab", name_lookup=lambda char: f"name-of-{char}")
        assert [info.name for cluster in clusters for info in cluster.chars] == [
            "name-of-a",
            "name-of-b",
        ]

    def test_unknown_engine(self) -> None:
        with pytest.raises(UnsupportedEngineError):
            mojibox.length(b"abc", UnitKind.BYTE, engine="icu4x")

    def test_env_engine_is_used(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENGINE_ENV_VAR, "icu4x")
        with pytest.raises(UnsupportedEngineError, match="icu4x"):
            mojibox.length(b"abc", UnitKind.GRAPHEME)

    def test_explicit_engine_wins_over_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENGINE_ENV_VAR, "icu4x")
        assert mojibox.length(b"abc", UnitKind.GRAPHEME, engine="regex") == 3
