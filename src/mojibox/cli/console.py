"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so
bootstrap paths (``--help``, ``--version``) remain functional even when
Rich is not installed.  Messages go to stderr; command results are
written to stdout by :mod:`mojibox.cli.render`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from mojibox.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, highlight=False)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(verbose: bool) -> None:
	"""Route ``mojibox`` loggers to stderr at DEBUG (verbose) or WARNING.

	Uses ``rich.logging.RichHandler`` when Rich is installed.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler: logging.Handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
	else:
		handler = RichHandler(console=get_rich_console(), show_path=False)

	logger = logging.getLogger("mojibox")
	for existing in list(logger.handlers):
		logger.removeHandler(existing)
	logger.addHandler(handler)
	logger.setLevel(level)
