"""Notification channels for VBOX Trade."""

from vboxtrade.notifications.base import NotificationPermission, SystemNotifier, Toaster
from vboxtrade.notifications.console import ConsoleToaster
from vboxtrade.notifications.desktop import DesktopNotifier

__all__ = [
    "ConsoleToaster",
    "DesktopNotifier",
    "NotificationPermission",
    "SystemNotifier",
    "Toaster",
]
