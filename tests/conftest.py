"""Shared pytest fixtures and configuration for the mojibox test suite.

Guidelines
----------
* Core tests must be pure, with no side effects.
* Optional libraries are hidden via ``sys.modules[name] = None``.
* Libraries that are installed but fail to load are simulated with
  :func:`break_native_library`.
* Tests must not depend on the caller's ``MOJIBOX_ENGINE`` setting.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from importlib.abc import MetaPathFinder
from typing import Any

import pytest

from mojibox.constants import ENGINE_ENV_VAR
from mojibox.core.segmenter import UnitSegmenter
from mojibox.infra.regex_provider import RegexGraphemeProvider


class _FailingLoadFinder(MetaPathFinder):
    """Fails the import of *module* like an extension whose shared library is missing."""

    def __init__(self, module: str) -> None:
        self.module = module

    def find_spec(self, fullname: str, path: Any, target: Any = None) -> None:
        if fullname == self.module:
            raise ImportError(f"lib{self.module}.so.73: cannot open shared object file")
        return None


@pytest.fixture(autouse=True)
def _clear_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENGINE_ENV_VAR, raising=False)


@pytest.fixture
def segmenter() -> UnitSegmenter:
    """Segmenter backed by the default ``regex`` engine."""
    return UnitSegmenter(RegexGraphemeProvider())


@pytest.fixture
def break_native_library(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make ``import <module>`` raise a plain ``ImportError``."""

    def _break(module: str) -> None:
        monkeypatch.delitem(sys.modules, module, raising=False)
        monkeypatch.setattr(sys, "meta_path", [_FailingLoadFinder(module), *sys.meta_path])

    return _break
