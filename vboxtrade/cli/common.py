"""Shared wiring for VBOX Trade CLI commands."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel

console = Console()


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Render an error panel."""
    body = f"[red]{message}[/red]"
    if error is not None:
        body += f"\n\n{error}"
    console.print(Panel(
        body,
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))


def get_config() -> dict:
    """Lazily load configuration."""
    from vboxtrade.config import load_config

    return load_config()


def get_engine(config: dict):
    """Build the alert engine over the local database."""
    from vboxtrade.alerts import AlertStore, NotificationDispatcher, PriceAlertEngine
    from vboxtrade.config import db_path
    from vboxtrade.db.store import DataStore
    from vboxtrade.notifications import ConsoleToaster, DesktopNotifier

    system = None
    if config.get("notifications", {}).get("desktop", True):
        system = DesktopNotifier()

    dispatcher = NotificationDispatcher(ConsoleToaster(console), system)
    return PriceAlertEngine(AlertStore(DataStore(db_path())), dispatcher)


def get_feed(config: dict, paper: bool = False):
    """Get the price feed selected by config or the --paper flag."""
    feed_config = config.get("feed", {})
    if paper or feed_config.get("mode", "api") == "paper":
        from vboxtrade.feeds.paper import PaperFeed

        return PaperFeed()

    from vboxtrade.feeds.ticker import TickerClient

    api_config = config.get("api", {})
    return TickerClient(
        primary_url=api_config.get("primary_url"),
        fallback_url=api_config.get("fallback_url"),
        limit=int(api_config.get("ticker_limit", 50)),
        timeout=float(api_config.get("timeout", 10.0)),
    )
