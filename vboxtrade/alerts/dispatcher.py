"""Alert notification dispatch over independent channels."""

import logging
from typing import Optional

from vboxtrade.models import Alert, AlertDirection
from vboxtrade.notifications.base import NotificationPermission, SystemNotifier, Toaster

logger = logging.getLogger(__name__)

TOAST_TITLE = "🔔 Price Alert"
SYSTEM_TITLE = "VBOX Price Alert"


def format_message(alert: Alert, current_price: float) -> str:
    """Build the human-readable alert message.

    Args:
        alert: Alert that fired.
        current_price: Price that caused the crossing.

    Returns:
        Message such as "Onion (Red Onion) is now ₹17.50 – crossed below ₹18.00".
    """
    if alert.direction == AlertDirection.BELOW:
        verb = "crossed below"
    else:
        verb = "rose above"
    return (
        f"{alert.instrument_label} is now ₹{current_price:.2f} – "
        f"{verb} ₹{alert.target_price:.2f}"
    )


def dedupe_tag(alert: Alert) -> str:
    return f"price-alert-{alert.id}"


class NotificationDispatcher:
    """Delivers alert notifications, best effort, over two channels.

    The in-app toast is always attempted. The OS notification is only
    attempted when the host reports permission as granted. A failure on one
    channel never affects the other and is never raised to the caller.
    """

    def __init__(self, toaster: Toaster, system: Optional[SystemNotifier] = None):
        """Initialize the dispatcher.

        Args:
            toaster: In-app toast channel.
            system: OS notification channel, or None to disable it.
        """
        self._toaster = toaster
        self._system = system

    def dispatch(self, alert: Alert, current_price: float) -> None:
        """Notify the user that an alert fired.

        Args:
            alert: Alert that fired.
            current_price: Price that caused the crossing.
        """
        message = format_message(alert, current_price)

        try:
            self._toaster.show(TOAST_TITLE, message)
        except Exception as e:
            logger.warning("Toast for alert %s failed: %s", alert.id, e)

        if self._system is None:
            return

        try:
            if self._system.query_permission() != NotificationPermission.GRANTED:
                return
            self._system.show(SYSTEM_TITLE, message, dedupe_tag(alert))
        except Exception as e:
            logger.warning("OS notification for alert %s failed: %s", alert.id, e)

    def request_permission_if_undetermined(self) -> None:
        """Ask for OS notification permission if the host has not decided yet."""
        if self._system is None:
            return

        try:
            if self._system.query_permission() == NotificationPermission.UNDETERMINED:
                permission = self._system.request_permission()
                logger.info("Notification permission: %s", permission.value)
        except Exception as e:
            logger.warning("Notification permission request failed: %s", e)
