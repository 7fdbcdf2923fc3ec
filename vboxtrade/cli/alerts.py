"""Alert management commands for VBOX Trade CLI.

Handles creating, listing, toggling, resetting and removing price alerts.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from vboxtrade.cli.common import console, get_config, get_engine, get_feed, print_error
from vboxtrade.models import Alert, AlertDirection


def _resolve_label(config: dict, instrument_id: str) -> str:
    """Look up an instrument's display label on the ticker.

    Falls back to the instrument id when the ticker is unavailable.
    """
    from vboxtrade.feeds.base import FeedError

    try:
        entries = get_feed(config).fetch_ticker()
    except FeedError:
        return instrument_id

    for entry in entries:
        if entry.id == instrument_id:
            return entry.label
    return instrument_id


def _status(alert: Alert) -> str:
    if alert.is_triggered:
        return "[yellow]✓ Triggered[/yellow]"
    if not alert.enabled:
        return "[dim]Disabled[/dim]"
    return "[green]● Active[/green]"


def _alerts_table(alerts: list[Alert], title: str) -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Commodity", style="bold")
    table.add_column("Condition")
    table.add_column("Created", style="dim")
    table.add_column("Status", justify="center")

    for alert in alerts:
        arrow = "▼ below" if alert.direction == AlertDirection.BELOW else "▲ above"
        table.add_row(
            alert.id[:8],
            alert.instrument_label,
            f"{arrow} ₹{alert.target_price:.2f}",
            alert.created_at.strftime("%Y-%m-%d %H:%M"),
            _status(alert),
        )

    return table


def _match_id(engine, prefix: str) -> Optional[str]:
    """Expand a short alert id to the full id when unambiguous."""
    matches = [a.id for a in engine.alerts if a.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    return None


@click.command("alert")
@click.argument("instrument_id")
@click.argument("target", type=float)
@click.option(
    "--below", "direction", flag_value=AlertDirection.BELOW.value, default=AlertDirection.BELOW.value,
    help="Alert when price drops below TARGET (default).",
)
@click.option(
    "--above", "direction", flag_value=AlertDirection.ABOVE.value,
    help="Alert when price rises above TARGET.",
)
@click.option("--label", default=None, help="Display name (looked up on the ticker if omitted).")
def create_alert(instrument_id: str, target: float, direction: str, label: Optional[str]) -> None:
    """Create a price alert.

    INSTRUMENT_ID is the ticker id of the commodity (see 'vboxtrade ticker').
    TARGET is the threshold price in ₹/kg.

    \b
    Examples:
      vboxtrade alert 2 17.50              # Onion drops below ₹17.50
      vboxtrade alert 6 70 --above         # Cotton rises above ₹70
      vboxtrade alert 3 12 --label Potato
    """
    config = get_config()

    try:
        engine = get_engine(config)
        alert = engine.create(
            instrument_id,
            label or _resolve_label(config, instrument_id),
            target,
            AlertDirection(direction),
        )
    except ValueError as e:
        print_error("Invalid alert:", e)
        raise SystemExit(1)
    except Exception as e:
        print_error("Failed to create alert:", e)
        raise SystemExit(1)

    verb = "drops below" if alert.direction == AlertDirection.BELOW else "rises above"
    console.print(Panel(
        f"[bold green]Alert Created[/bold green]\n\n"
        f"ID:        {alert.id}\n"
        f"Commodity: {alert.instrument_label}\n"
        f"Condition: {verb} ₹{alert.target_price:.2f}",
        title="[bold]New Alert[/bold]",
        border_style="green",
    ))


@click.command("alerts")
@click.option("--remove", "remove_id", default=None, help="Remove alert with specified ID.")
@click.option("--toggle", "toggle_id", default=None, help="Enable/disable alert with specified ID.")
@click.option("--reset", "reset_id", default=None, help="Re-arm a triggered alert.")
@click.option("--clear", is_flag=True, help="Remove every alert.")
@click.option("--instrument", default=None, help="Only show alerts for this instrument id.")
def list_alerts(
    remove_id: Optional[str],
    toggle_id: Optional[str],
    reset_id: Optional[str],
    clear: bool,
    instrument: Optional[str],
) -> None:
    """Display or manage price alerts.

    IDs may be shortened to any unique prefix.

    \b
    Examples:
      vboxtrade alerts                  # List all alerts
      vboxtrade alerts --toggle 3f2a    # Disable or re-enable an alert
      vboxtrade alerts --reset 3f2a     # Re-arm a triggered alert
      vboxtrade alerts --remove 3f2a    # Delete an alert
    """
    try:
        engine = get_engine(get_config())

        if clear:
            count = len(engine.alerts)
            engine.clear_all()
            console.print(f"[green]✓ Removed {count} alert(s)[/green]")
            return

        for prefix, action, verb in (
            (remove_id, engine.remove, "Removed"),
            (toggle_id, engine.toggle, "Toggled"),
            (reset_id, engine.reset, "Reset"),
        ):
            if prefix is None:
                continue
            alert_id = _match_id(engine, prefix)
            if alert_id is None:
                console.print(f"[yellow]Alert {prefix} not found[/yellow]")
                return
            alert = engine.get(alert_id)
            action(alert_id)
            console.print(f"[green]✓ {verb} alert {alert_id[:8]} ({alert.instrument_label})[/green]")
            return

        if instrument:
            alerts = engine.alerts_for_instrument(instrument)
        else:
            alerts = list(engine.alerts)

        if not alerts:
            console.print(Panel(
                "[dim]No alerts set. Use 'vboxtrade alert INSTRUMENT_ID TARGET' to create one.[/dim]",
                title="[bold]Alerts[/bold]",
                border_style="dim",
            ))
            return

        console.print(_alerts_table(alerts, "Price Alerts"))
        console.print(
            f"\n[dim]Total: {len(alerts)} alerts "
            f"({len(engine.active_alerts())} active, {len(engine.triggered_alerts())} triggered)[/dim]"
        )

    except Exception as e:
        print_error("Failed to manage alerts:", e)
        raise SystemExit(1)
