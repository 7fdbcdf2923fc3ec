"""Price alert lifecycle and tick evaluation.

The engine owns the alert list. Every mutation replaces the in-memory
list wholesale and then persists the full list; persistence is best effort,
so the in-memory list stays authoritative for the life of the process.
"""

import logging
import math
import threading
import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Union

from vboxtrade.alerts.detector import detect
from vboxtrade.alerts.dispatcher import NotificationDispatcher
from vboxtrade.alerts.store import AlertStore
from vboxtrade.models import Alert, AlertDirection

logger = logging.getLogger(__name__)

Snapshot = Union[Mapping[str, Any], Iterable[Any]]
AlertsListener = Callable[[tuple[Alert, ...]], None]


class PriceAlertEngine:
    """Evaluates price alerts against a stream of snapshot ticks.

    States per alert: Active (enabled, untriggered), Triggered, Disabled,
    and Deleted. Only Active alerts are evaluated. All operations share one
    lock so a tick never interleaves with a user action.
    """

    def __init__(
        self,
        store: AlertStore,
        dispatcher: NotificationDispatcher,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the engine and load persisted alerts.

        Args:
            store: Alert persistence.
            dispatcher: Notification dispatcher for fired alerts.
            clock: Timestamp source (defaults to datetime.now).
        """
        self._store = store
        self._dispatcher = dispatcher
        self._clock = clock or datetime.now
        self._lock = threading.RLock()
        self._listeners: list[AlertsListener] = []
        self._last_prices: dict[str, float] = {}
        self._alerts: list[Alert] = store.load_all()

    # ==================== Views ====================

    @property
    def alerts(self) -> tuple[Alert, ...]:
        """Snapshot of all alerts in creation order."""
        with self._lock:
            return tuple(self._alerts)

    def get(self, alert_id: str) -> Optional[Alert]:
        with self._lock:
            for alert in self._alerts:
                if alert.id == alert_id:
                    return alert
            return None

    def alerts_for_instrument(self, instrument_id: str) -> list[Alert]:
        with self._lock:
            return [a for a in self._alerts if a.instrument_id == instrument_id]

    def active_alerts(self) -> list[Alert]:
        with self._lock:
            return [a for a in self._alerts if a.is_armed]

    def triggered_alerts(self) -> list[Alert]:
        with self._lock:
            return [a for a in self._alerts if a.is_triggered]

    def last_price(self, instrument_id: str) -> Optional[float]:
        """Last price observed for an instrument in this process."""
        with self._lock:
            return self._last_prices.get(instrument_id)

    # ==================== Observers ====================

    def subscribe(self, listener: AlertsListener) -> None:
        """Register a callback invoked with all alerts after every change."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: AlertsListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify_listeners(self) -> None:
        alerts = tuple(self._alerts)
        for listener in list(self._listeners):
            try:
                listener(alerts)
            except Exception as e:
                logger.warning("Alert listener %r failed: %s", listener, e)

    # ==================== Lifecycle ====================

    def _commit(self, alerts: list[Alert]) -> None:
        """Replace the alert list, persist it and notify listeners."""
        self._alerts = alerts
        self._store.save_all(alerts)
        self._notify_listeners()

    def _replace(self, alert_id: str, **changes: Any) -> Optional[Alert]:
        """Apply field changes to one alert. Unknown ids are a no-op."""
        updated = None
        alerts = []
        for alert in self._alerts:
            if alert.id == alert_id:
                alert = alert.model_copy(update=changes)
                updated = alert
            alerts.append(alert)
        if updated is not None:
            self._commit(alerts)
        return updated

    def _new_id(self) -> str:
        existing = {a.id for a in self._alerts}
        while True:
            alert_id = uuid.uuid4().hex
            if alert_id not in existing:
                return alert_id

    def create(
        self,
        instrument_id: str,
        instrument_label: str,
        target_price: float,
        direction: AlertDirection = AlertDirection.BELOW,
    ) -> Alert:
        """Create an armed alert.

        Args:
            instrument_id: Instrument to watch.
            instrument_label: Display name for messages.
            target_price: Threshold price; finite and non-negative.
            direction: Crossing direction to watch for.

        Returns:
            The new alert.

        Raises:
            ValueError: If target_price is not a finite non-negative number.
        """
        try:
            target = float(target_price)
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"Target price must be a number, got {target_price!r}")
        if not math.isfinite(target) or target < 0:
            raise ValueError(f"Target price must be finite and non-negative, got {target}")

        with self._lock:
            alert = Alert(
                id=self._new_id(),
                instrument_id=instrument_id,
                instrument_label=instrument_label,
                target_price=target,
                direction=AlertDirection(direction),
                enabled=True,
                created_at=self._clock(),
                triggered_at=None,
            )
            self._commit(self._alerts + [alert])

        self._dispatcher.request_permission_if_undetermined()
        return alert

    def remove(self, alert_id: str) -> None:
        """Delete an alert. Removing an unknown id does nothing."""
        with self._lock:
            alerts = [a for a in self._alerts if a.id != alert_id]
            if len(alerts) != len(self._alerts):
                self._commit(alerts)

    def toggle(self, alert_id: str) -> Optional[Alert]:
        """Flip enabled and re-arm the alert."""
        with self._lock:
            alert = self.get(alert_id)
            if alert is None:
                return None
            return self._replace(alert_id, enabled=not alert.enabled, triggered_at=None)

    def reset(self, alert_id: str) -> Optional[Alert]:
        """Re-arm a triggered alert.

        The observed price baseline is left untouched, so an instrument
        already past the threshold does not fire again until it crosses
        back and re-crosses.
        """
        with self._lock:
            return self._replace(alert_id, enabled=True, triggered_at=None)

    def clear_all(self) -> None:
        with self._lock:
            self._commit([])

    # ==================== Evaluation ====================

    def evaluate_tick(self, snapshot: Snapshot) -> list[Alert]:
        """Evaluate every armed alert against one price snapshot.

        Args:
            snapshot: Mapping of instrument id to price, or an iterable of
                (instrument_id, price) pairs. Instruments missing from the
                snapshot keep their previous price and state.

        Returns:
            Alerts that fired on this tick, in their triggered state.
        """
        with self._lock:
            prices = _parse_snapshot(snapshot)
            fired = []
            alerts = []

            for alert in self._alerts:
                current = prices.get(alert.instrument_id) if alert.is_armed else None
                if current is not None and detect(
                    alert, self._last_prices.get(alert.instrument_id), current
                ):
                    logger.info(
                        "Alert %s fired: %s at %.2f", alert.id, alert.instrument_id, current
                    )
                    self._dispatcher.dispatch(alert, current)
                    alert = alert.model_copy(update={"triggered_at": self._clock()})
                    fired.append(alert)
                alerts.append(alert)

            # listeners notified by _commit read last_price() for this tick
            self._last_prices.update(prices)
            if fired:
                self._commit(alerts)
            return fired


def _parse_snapshot(snapshot: Snapshot) -> dict[str, float]:
    """Extract valid prices from a snapshot, skipping malformed entries."""
    if snapshot is None:
        return {}

    entries = snapshot.items() if isinstance(snapshot, Mapping) else snapshot
    prices: dict[str, float] = {}
    try:
        for entry in entries:
            try:
                instrument_id, price = entry
            except (TypeError, ValueError):
                logger.debug("Skipping malformed snapshot entry %r", entry)
                continue
            if not isinstance(instrument_id, str) or isinstance(price, bool):
                logger.debug("Skipping malformed snapshot entry %r", entry)
                continue
            try:
                price = float(price)
            except (TypeError, ValueError, OverflowError):
                logger.debug("Skipping non-numeric price for %s", instrument_id)
                continue
            if not math.isfinite(price):
                logger.debug("Skipping non-finite price for %s", instrument_id)
                continue
            prices[instrument_id] = price
    except TypeError:
        logger.warning("Ignoring snapshot of type %s", type(snapshot).__name__)
    return prices
