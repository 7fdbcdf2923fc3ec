"""Main CLI entry point for VBOX Trade.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

import importlib
import logging

import click
from rich.logging import RichHandler

from vboxtrade.cli.common import console


class LazyGroup(click.Group):
    """Click group whose subcommands are imported on first use.

    Each entry in ``lazy_subcommands`` maps a command name to
    ``"module:attribute"``, so ``vboxtrade --help`` lists commands without
    importing them.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.commands and cmd_name in self._lazy_subcommands:
            module_path, attr = self._lazy_subcommands[cmd_name].split(":")
            cmd = getattr(importlib.import_module(module_path), attr, None)
            if not isinstance(cmd, click.Command):
                raise click.ClickException(f"Could not load command '{cmd_name}' from {module_path}")
            self.add_command(cmd, cmd_name)
        return self.commands.get(cmd_name)


LAZY_SUBCOMMANDS = {
    "alert": "vboxtrade.cli.alerts:create_alert",
    "alerts": "vboxtrade.cli.alerts:list_alerts",
    "ticker": "vboxtrade.cli.ticker:ticker",
    "watch": "vboxtrade.cli.watch:watch",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="vboxtrade")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """VBOX Trade - commodity price alerts from your terminal.

    Set price alerts on mandi commodities and get notified when
    the market ticker crosses your target.

    \b
    Quick Start:
      vboxtrade init                  # Write a config file
      vboxtrade ticker                # Show the market board
      vboxtrade alert 2 17.50         # Alert when Onion drops below ₹17.50
      vboxtrade watch                 # Watch prices and fire alerts
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)


@cli.command("init")
def init() -> None:
    """Write a config file with default settings."""
    from vboxtrade.config import config_path, create_template_config

    if config_path().exists():
        console.print(f"[yellow]Config already exists at {config_path()}[/yellow]")
        return

    path = create_template_config()
    console.print(f"[green]✓ Wrote config to [cyan]{path}[/cyan][/green]")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
