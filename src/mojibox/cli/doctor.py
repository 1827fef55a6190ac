"""``mojibox doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising which
grapheme engines can be used in the current environment.

This module lives in the CLI layer, so it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from mojibox.cli import exit_codes
from mojibox.cli.console import console
from mojibox.constants import default_engine
from mojibox.infra.engines import detect_engines
from mojibox.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _mojibox_version_check() -> Check:
    """Return (label, value, status) for the mojibox version row."""
    return "mojibox", __version__, "[green]OK[/green]"


def _engine_checks() -> list[Check]:
    """One row per grapheme engine; only the default engine can FAIL."""
    selected = default_engine().strip().lower()
    statuses = detect_engines()
    rows: list[Check] = []
    for status_obj in statuses:
        label = f"engine:{status_obj.name}"
        if status_obj.name == selected:
            label += " (default)"
        if status_obj.available:
            rows.append((label, "available", "[green]OK[/green]"))
        elif status_obj.name == selected:
            rows.append((label, "NOT INSTALLED", "[red]FAIL[/red]"))
        else:
            rows.append((label, "not installed", "[yellow]WARN[/yellow]"))
    if selected not in {status_obj.name for status_obj in statuses}:
        rows.append((f"engine:{selected}", "unknown engine", "[red]FAIL[/red]"))
    return rows


def _rich_check() -> Check:
    """Return (label, value, status) for the optional Rich row."""
    try:
        import rich  # noqa: F401
    except ImportError:
        return "rich", "not installed", "[yellow]WARN[/yellow]"
    return "rich", "installed", "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nmojibox doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<24} {'Value':<24} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<24} {value:<24} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when the default engine is usable,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = [
        _mojibox_version_check(),
        _python_version_check(),
        *_engine_checks(),
        _rich_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="mojibox doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=16)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
