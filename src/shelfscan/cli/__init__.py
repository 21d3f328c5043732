"""Command-line interface for shelfscan.

This package provides the Typer app used by the ``shelfscan`` entry point.

- app: The Typer application object with the ``scan`` and ``version`` commands.
- main: Console-script entry point.

All output goes through Rich, with pretty tracebacks installed.
"""

from shelfscan.cli.commands import app, main

__all__ = ["app", "main"]
