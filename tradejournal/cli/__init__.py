"""CLI commands for tradejournal.

This package provides the command-line interface: authentication,
trade entry, statistics, the monthly calendar, CSV interchange and
account management.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
