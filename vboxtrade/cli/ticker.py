"""Market ticker command for VBOX Trade CLI."""

from typing import Optional

import click
from rich.table import Table

from vboxtrade.cli.common import console, get_config, get_feed, print_error
from vboxtrade.models import TickerEntry


def ticker_table(entries: list[TickerEntry], title: str = "Market Ticker", engine=None) -> Table:
    """Build the ticker table, with alert counts when an engine is given."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Commodity", style="bold")
    table.add_column("Price", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Change %", justify="right")
    if engine is not None:
        table.add_column("Alerts", justify="center")

    for entry in entries:
        if entry.change >= 0:
            change_color = "green"
            arrow = "▲"
        else:
            change_color = "red"
            arrow = "▼"

        row = [
            entry.id,
            f"{entry.emoji} {entry.label}".strip(),
            f"₹{entry.price:.2f}",
            f"[{change_color}]{arrow} {entry.change:+.2f}[/{change_color}]",
            f"[{change_color}]{entry.change_percent:+.2f}%[/{change_color}]",
        ]
        if engine is not None:
            alerts = engine.alerts_for_instrument(entry.id)
            armed = sum(1 for a in alerts if a.is_armed)
            fired = sum(1 for a in alerts if a.is_triggered)
            cell = f"{armed}" if armed else "-"
            if fired:
                cell += f" [yellow]({fired} fired)[/yellow]"
            row.append(cell)
        table.add_row(*row)

    return table


@click.command("ticker")
@click.option("-l", "--limit", default=None, type=int, help="Maximum number of rows.")
@click.option("--paper", is_flag=True, help="Use the simulated ticker.")
def ticker(limit: Optional[int], paper: bool) -> None:
    """Display the current market ticker.

    \b
    Examples:
      vboxtrade ticker
      vboxtrade ticker --limit 10
      vboxtrade ticker --paper
    """
    from vboxtrade.feeds.base import FeedError

    config = get_config()

    try:
        entries = get_feed(config, paper=paper).fetch_ticker()
    except FeedError as e:
        print_error("Failed to fetch ticker:", e)
        raise SystemExit(1)

    if limit is not None:
        entries = entries[:limit]

    console.print(ticker_table(entries))
