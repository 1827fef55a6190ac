"""CLI application entry point and command routing for mojibox.

This module is the **sole error boundary** for the entire application.
It catches :class:`~mojibox.exceptions.MojiboxError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core and
  infrastructure layers.
* Command results go to stdout via :mod:`mojibox.cli.render`; messages go
  to stderr via the Rich console.
* Every handler computes its whole result before writing anything.
* Positional ``INPUT`` arguments are turned back into raw bytes with
  :func:`os.fsencode`, so ill-formed UTF-8 on the command line reaches
  the decoder unchanged.  ``-`` reads stdin.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable

from mojibox.cli import exit_codes
from mojibox.cli.console import configure_logging, console
from mojibox.cli.render import DUMP_FORMATS
from mojibox.exceptions import MojiboxError
from mojibox.version import __version__

logger = logging.getLogger(__name__)

_UNIT_KINDS: tuple[str, ...] = ("grapheme", "codepoint", "byte")
_HEX_FORMATS: tuple[str, ...] = ("default", "spaced", "escaped")


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------

def _read_input(value: str) -> bytes:
    """Return the raw bytes of a positional INPUT argument."""
    if value == "-":
        return sys.stdin.buffer.read()
    return os.fsencode(value)


def _read_text(value: str) -> str:
    """Return INPUT as text, refusing ill-formed UTF-8."""
    from mojibox.core.decoder import decode_strict

    return "".join(chr(scalar.value) for scalar in decode_strict(_read_input(value)))


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_unit_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-m",
        "--mode",
        choices=_UNIT_KINDS,
        default="grapheme",
        help="Unit to operate on (default: grapheme).",
    )
    _add_engine_option(parser)


def _add_engine_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-e",
        "--engine",
        default=None,
        help="Grapheme segmentation engine: regex or icu "
        "(default: $MOJIBOX_ENGINE or regex).",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser with one sub-command each."""
    parser = argparse.ArgumentParser(
        prog="mojibox",
        description="A CLI tool for flexible Unicode string manipulation and analysis.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostic details to stderr.",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    iter_parser = sub.add_parser("iter", help="Print the input one unit per line.")
    _add_unit_options(iter_parser)
    iter_parser.add_argument("input", help="Input string, or '-' for stdin.")

    len_parser = sub.add_parser("len", help="Count units in the input.")
    _add_unit_options(len_parser)
    len_parser.add_argument("input", help="Input string, or '-' for stdin.")

    take_parser = sub.add_parser("take", help="Print the first N units.")
    _add_unit_options(take_parser)
    take_parser.add_argument("n", type=_non_negative_int, help="Number of units to take.")
    take_parser.add_argument("input", help="Input string, or '-' for stdin.")

    drop_parser = sub.add_parser("drop", help="Skip N units and print the rest.")
    _add_unit_options(drop_parser)
    drop_parser.add_argument("n", type=_non_negative_int, help="Number of units to drop.")
    drop_parser.add_argument("input", help="Input string, or '-' for stdin.")

    dump_parser = sub.add_parser(
        "dump",
        help="Show grapheme clusters with their code points and names.",
    )
    dump_parser.add_argument(
        "-f",
        "--format",
        choices=DUMP_FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    _add_engine_option(dump_parser)
    dump_parser.add_argument("input", help="Input string, or '-' for stdin.")

    ord_parser = sub.add_parser("ord", help="Convert characters to code points.")
    ord_parser.add_argument("--lower", action="store_true", help="Lowercase hex digits.")
    ord_parser.add_argument("--no-0x", action="store_true", help="Omit the 0x prefix.")
    ord_parser.add_argument("input", help="Input string, or '-' for stdin.")

    chr_parser = sub.add_parser("chr", help="Convert hex code points to characters.")
    chr_parser.add_argument(
        "codepoints",
        nargs="+",
        help="Code points in hex, with or without 0x / U+ prefix.",
    )

    bin2hex_parser = sub.add_parser("bin2hex", help="Convert input bytes to hex.")
    bin2hex_parser.add_argument("--lower", action="store_true", help="Lowercase hex digits.")
    bin2hex_parser.add_argument(
        "-f",
        "--format",
        choices=_HEX_FORMATS,
        default="default",
        help="Hex layout (default: continuous).",
    )
    bin2hex_parser.add_argument("input", help="Input string, or '-' for stdin.")

    hex2bin_parser = sub.add_parser(
        "hex2bin",
        help="Convert hex (continuous, spaced or \\x-escaped) to bytes.",
    )
    hex2bin_parser.add_argument("hex_input", help="Hex text, or '-' for stdin.")

    scrub_parser = sub.add_parser(
        "scrub",
        help="Replace invalid UTF-8 sequences with U+FFFD.",
    )
    scrub_parser.add_argument(
        "--input-format",
        choices=("binary", "hex"),
        default="binary",
        help="Treat INPUT as raw bytes or as hex text (default: binary).",
    )
    scrub_parser.add_argument(
        "--report",
        action="store_true",
        help="List the replaced byte spans on stderr.",
    )
    scrub_parser.add_argument("input", help="Input data, or '-' for stdin.")

    escape_parser = sub.add_parser("escape", help="Escape characters as \\u sequences.")
    escape_parser.add_argument(
        "-f",
        "--format",
        choices=("default", "json"),
        default="default",
        help="\\u{H+} per character (default) or JSON \\uHHHH code units.",
    )
    escape_parser.add_argument("--lower", action="store_true", help="Lowercase hex digits.")
    escape_parser.add_argument("input", help="Input string, or '-' for stdin.")

    unescape_parser = sub.add_parser("unescape", help="Resolve \\u escape sequences.")
    unescape_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first malformed escape instead of inserting U+FFFD.",
    )
    unescape_parser.add_argument("input", help="Escaped text, or '-' for stdin.")

    sub.add_parser("doctor", help="Report which grapheme engines are available.")
    return parser


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_units(args: argparse.Namespace) -> int:
    """Dispatch ``iter``, ``len``, ``take`` and ``drop``."""
    from mojibox.api import segmenter
    from mojibox.cli.render import write_lines
    from mojibox.core.models import UnitKind

    seg = segmenter(args.engine)
    kind = UnitKind(args.mode)
    buffer = _read_input(args.input)

    if args.command == "len":
        write_lines([str(seg.length(buffer, kind))])
        return exit_codes.SUCCESS

    if args.command == "take":
        units = seg.take(buffer, kind, args.n)
    elif args.command == "drop":
        units = seg.drop(buffer, kind, args.n)
    else:
        units = list(seg.iterate(buffer, kind))
    write_lines(unit.text for unit in units)
    return exit_codes.SUCCESS


def _handle_dump(args: argparse.Namespace) -> int:
    from mojibox.api import dump
    from mojibox.cli.render import render_dump, write_text

    clusters = dump(_read_input(args.input), args.engine)
    write_text(render_dump(clusters, args.format))
    return exit_codes.SUCCESS


def _handle_ord(args: argparse.Namespace) -> int:
    from mojibox.cli.render import write_lines
    from mojibox.core.codepoints import ord_characters

    codepoints = ord_characters(_read_text(args.input), lower=args.lower, prefix=not args.no_0x)
    write_lines([" ".join(codepoints)])
    return exit_codes.SUCCESS


def _handle_chr(args: argparse.Namespace) -> int:
    from mojibox.cli.render import write_lines
    from mojibox.core.codepoints import chr_from_codepoints

    write_lines([chr_from_codepoints(args.codepoints)])
    return exit_codes.SUCCESS


def _handle_bin2hex(args: argparse.Namespace) -> int:
    from mojibox.cli.render import write_lines
    from mojibox.core.hex_codec import encode_hex
    from mojibox.core.models import HexCase, HexLayout

    case = HexCase.LOWER if args.lower else HexCase.UPPER
    write_lines([encode_hex(_read_input(args.input), HexLayout(args.format), case)])
    return exit_codes.SUCCESS


def _handle_hex2bin(args: argparse.Namespace) -> int:
    from mojibox.cli.render import write_bytes
    from mojibox.core.hex_codec import decode_hex

    write_bytes(decode_hex(_read_text(args.hex_input)))
    return exit_codes.SUCCESS


def _handle_scrub(args: argparse.Namespace) -> int:
    from mojibox.cli.render import format_spans, write_lines
    from mojibox.core.hex_codec import decode_hex
    from mojibox.core.scrubber import scrub_report

    if args.input_format == "hex":
        buffer = decode_hex(_read_text(args.input))
    else:
        buffer = _read_input(args.input)

    result = scrub_report(buffer)
    if args.report and result.replacements:
        console.print(
            f"[yellow]Replaced {result.replacements} invalid span(s):[/yellow] "
            f"{format_spans(result.invalid_spans)}"
        )
    write_lines([result.text])
    return exit_codes.SUCCESS


def _handle_escape(args: argparse.Namespace) -> int:
    from mojibox.cli.render import write_lines
    from mojibox.core.escape import escape
    from mojibox.core.models import EscapeFormat, HexCase

    case = HexCase.LOWER if args.lower else HexCase.UPPER
    text = _read_text(args.input)
    write_lines([escape(map(ord, text), EscapeFormat(args.format), case)])
    return exit_codes.SUCCESS


def _handle_unescape(args: argparse.Namespace) -> int:
    from mojibox.cli.render import write_lines
    from mojibox.core.escape import unescape

    write_lines([unescape(_read_text(args.input), strict=args.strict)])
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from mojibox.cli.doctor import run_doctor

    return run_doctor()


_HANDLERS: dict[str, Callable[[argparse.Namespace], int]] = {
    "iter": _handle_units,
    "len": _handle_units,
    "take": _handle_units,
    "drop": _handle_units,
    "dump": _handle_dump,
    "ord": _handle_ord,
    "chr": _handle_chr,
    "bin2hex": _handle_bin2hex,
    "hex2bin": _handle_hex2bin,
    "scrub": _handle_scrub,
    "escape": _handle_escape,
    "unescape": _handle_unescape,
    "doctor": _handle_doctor,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the mojibox CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.verbose:
        configure_logging(verbose=True)
    logger.debug("running command %r", args.command)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except MojiboxError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
