"""Process exit codes returned by :func:`mojibox.cli.app.main`.

Only :func:`mojibox.cli.app.cli` turns these into ``sys.exit`` calls;
handlers return them.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command wrote its full result, or ``doctor`` found a usable default engine."""

GENERAL_ERROR: int = 1
"""A MojiboxError was reported: ill-formed UTF-8 on a strict path, bad hex,
a rejected escape under ``--strict``, a bad code point, an unusable engine,
or a failing ``doctor`` check."""

UNEXPECTED_ERROR: int = 2
"""An exception other than MojiboxError reached the error boundary."""

USAGE_ERROR: int = 2
"""argparse rejected the command line (its own ``parser.error`` status)."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""
