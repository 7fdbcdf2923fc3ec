"""Durable alert list backed by a key-value store."""

import logging

from pydantic import TypeAdapter, ValidationError

from vboxtrade.db.store import KeyValueStore
from vboxtrade.models import Alert

logger = logging.getLogger(__name__)

ALERTS_KEY = "price_alerts"

_ALERT_LIST = TypeAdapter(list[Alert])


class AlertStore:
    """Loads and saves the complete alert list as one JSON blob.

    This is a client-side cache, not a system of record: reads fail soft
    and writes are best effort.
    """

    def __init__(self, kv: KeyValueStore, key: str = ALERTS_KEY):
        """Initialize the alert store.

        Args:
            kv: Key-value persistence collaborator.
            key: Key the alert list is stored under.
        """
        self._kv = kv
        self._key = key

    def load_all(self) -> list[Alert]:
        """Load every persisted alert.

        Returns:
            Alerts in stored order, or an empty list if nothing usable
            is stored.
        """
        try:
            blob = self._kv.get(self._key)
        except Exception as e:
            logger.warning("Could not read alerts: %s", e)
            return []

        if not blob:
            return []

        try:
            alerts = _ALERT_LIST.validate_json(blob)
        except ValidationError as e:
            logger.warning("Discarding unreadable alert data: %s", e)
            return []

        seen: set[str] = set()
        unique = []
        for alert in alerts:
            if alert.id in seen:
                logger.warning("Dropping duplicate alert id %s", alert.id)
                continue
            seen.add(alert.id)
            unique.append(alert)
        return unique

    def save_all(self, alerts: list[Alert]) -> bool:
        """Persist the complete alert list.

        Args:
            alerts: Full post-mutation alert list.

        Returns:
            True if the write succeeded, False otherwise.
        """
        try:
            ok = self._kv.set(self._key, _ALERT_LIST.dump_json(list(alerts)))
        except Exception as e:
            logger.warning("Could not save alerts: %s", e)
            return False
        if not ok:
            logger.warning("Alert store rejected write of %d alert(s)", len(alerts))
        return ok
