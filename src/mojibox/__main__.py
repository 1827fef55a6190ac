"""``python -m mojibox``: same entry point and exit codes as the ``mojibox`` script."""

from __future__ import annotations

from mojibox.cli.app import cli

if __name__ == "__main__":
    cli()
