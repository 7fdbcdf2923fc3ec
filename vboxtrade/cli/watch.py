"""Live alert watcher for VBOX Trade CLI.

Polls the ticker, feeds every snapshot to the alert engine and renders
the board until interrupted.
"""

import logging
from typing import Optional

import click
from rich.console import Group
from rich.text import Text

from vboxtrade.cli.common import console, get_config, get_engine, get_feed, print_error
from vboxtrade.cli.ticker import ticker_table

logger = logging.getLogger(__name__)


def poll_once(feed, engine) -> tuple[list, list]:
    """Fetch one snapshot and evaluate it.

    A feed failure counts as a missed tick: nothing is evaluated and the
    observed prices stay as they were.

    Returns:
        Tuple of (ticker entries, alerts fired on this tick).
    """
    from vboxtrade.feeds.base import FeedError, to_snapshot

    try:
        entries = feed.fetch_ticker()
    except FeedError as e:
        logger.warning("Missed tick: %s", e)
        return [], []

    return entries, engine.evaluate_tick(to_snapshot(entries))


@click.command("watch")
@click.option(
    "-i", "--interval",
    default=None,
    type=click.IntRange(min=1),
    help="Polling interval in seconds (default: feed.poll_interval, 60).",
)
@click.option("--paper", is_flag=True, help="Use the simulated ticker.")
@click.option("--ticks", default=None, type=int, hidden=True, help="Stop after N ticks.")
def watch(interval: Optional[int], paper: bool, ticks: Optional[int]) -> None:
    """Watch the ticker and fire price alerts.

    Press Ctrl+C to stop watching.

    \b
    Examples:
      vboxtrade watch
      vboxtrade watch --interval 30
      vboxtrade watch --paper --interval 2
    """
    import time
    from rich.live import Live

    config = get_config()
    if interval is None:
        interval = max(1, int(config.get("feed", {}).get("poll_interval", 60)))

    try:
        engine = get_engine(config)
        feed = get_feed(config, paper=paper)
    except Exception as e:
        print_error("Failed to start watcher:", e)
        raise SystemExit(1)

    entries: list = []

    def render() -> Group:
        status = Text(
            f"{len(engine.active_alerts())} active, "
            f"{len(engine.triggered_alerts())} triggered - refreshing every {interval}s",
            style="dim",
        )
        return Group(ticker_table(entries, "Live Prices (Ctrl+C to stop)", engine), status)

    console.print(f"[dim]Watching {len(engine.alerts)} alert(s)...[/dim]\n")

    count = 0
    try:
        with Live(render(), refresh_per_second=1, console=console) as live_display:
            while ticks is None or count < ticks:
                latest, _ = poll_once(feed, engine)
                if latest:
                    entries = latest
                live_display.update(render())
                count += 1
                if ticks is None or count < ticks:
                    time.sleep(interval)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped watching.[/dim]")
