"""Desktop notifications via the platform notification command."""

import logging
import shutil
import subprocess
import sys
from typing import Optional

from vboxtrade.notifications.base import NotificationPermission, SystemNotifier

logger = logging.getLogger(__name__)


class DesktopNotifier(SystemNotifier):
    """Posts OS notifications through notify-send (Linux) or osascript (macOS).

    Permission is granted when the platform command is available and
    denied otherwise; there is no interactive prompt to wait on.
    """

    # Upper bound for one notification command
    TIMEOUT_SECONDS = 5

    def __init__(self, platform: Optional[str] = None):
        """Initialize the desktop notifier.

        Args:
            platform: Platform name override (defaults to sys.platform).
        """
        self._platform = platform or sys.platform
        self._command = self._find_command()

    def _find_command(self) -> Optional[str]:
        """Locate the notification command for this platform."""
        if self._platform == "darwin":
            return shutil.which("osascript")
        if self._platform.startswith("linux"):
            return shutil.which("notify-send")
        return None

    def query_permission(self) -> NotificationPermission:
        if self._command is None:
            return NotificationPermission.DENIED
        return NotificationPermission.GRANTED

    def request_permission(self) -> NotificationPermission:
        # Re-probe in case the command was installed since startup
        self._command = self._find_command()
        return self.query_permission()

    def _build_args(self, title: str, body: str, tag: str) -> list[str]:
        """Build the command line for one notification."""
        if self._platform == "darwin":
            script = 'display notification "{}" with title "{}"'.format(
                _escape_applescript(body), _escape_applescript(title)
            )
            return [self._command, "-e", script]
        return [
            self._command,
            "--app-name=VBOX Trade",
            f"--hint=string:x-canonical-private-synchronous:{tag}",
            title,
            body,
        ]

    def show(self, title: str, body: str, tag: str) -> None:
        if self._command is None:
            raise RuntimeError("No desktop notification command available")

        logger.debug("Posting desktop notification %s", tag)
        subprocess.run(
            self._build_args(title, body, tag),
            check=True,
            capture_output=True,
            timeout=self.TIMEOUT_SECONDS,
        )


def _escape_applescript(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
