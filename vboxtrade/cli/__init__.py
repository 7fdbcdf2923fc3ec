"""CLI commands for VBOX Trade.

This package provides the command-line interface for VBOX Trade:
price alerts, the market ticker and the live alert watcher.
"""

from vboxtrade.cli.main import cli, main

__all__ = ["cli", "main"]
