"""Data models for VBOX Trade."""

from vboxtrade.models.alert import Alert, AlertDirection
from vboxtrade.models.ticker import TickerEntry

__all__ = [
    "Alert",
    "AlertDirection",
    "TickerEntry",
]
