"""Price alert engine for VBOX Trade."""

from vboxtrade.alerts.detector import detect
from vboxtrade.alerts.dispatcher import NotificationDispatcher, format_message
from vboxtrade.alerts.engine import PriceAlertEngine
from vboxtrade.alerts.store import ALERTS_KEY, AlertStore

__all__ = [
    "ALERTS_KEY",
    "AlertStore",
    "NotificationDispatcher",
    "PriceAlertEngine",
    "detect",
    "format_message",
]
