"""Base notification channel interfaces."""

from abc import ABC, abstractmethod
from enum import Enum


class NotificationPermission(str, Enum):
    """Host answer to whether OS notifications may be shown."""

    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class Toaster(ABC):
    """In-app notification channel. Fire-and-forget."""

    @abstractmethod
    def show(self, title: str, body: str) -> None:
        """Show a transient in-app message.

        Args:
            title: Short heading.
            body: Message text.
        """
        pass


class SystemNotifier(ABC):
    """OS-level notification channel.

    Implementations must return promptly from every method; a host that
    prompts the user for permission does so without blocking the caller.
    """

    @abstractmethod
    def query_permission(self) -> NotificationPermission:
        """Report the current notification permission.

        Returns:
            Current permission state.
        """
        pass

    @abstractmethod
    def request_permission(self) -> NotificationPermission:
        """Ask the host for permission to show notifications.

        Returns:
            Permission state known when the call returns.
        """
        pass

    @abstractmethod
    def show(self, title: str, body: str, tag: str) -> None:
        """Post an OS notification.

        Args:
            title: Notification title.
            body: Notification body.
            tag: Dedupe tag; hosts coalesce notifications sharing a tag.
        """
        pass
