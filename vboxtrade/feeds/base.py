"""Base price feed interface for VBOX Trade."""

from abc import ABC, abstractmethod

from vboxtrade.models import TickerEntry


class FeedError(Exception):
    """Raised when no price snapshot could be fetched."""


class PriceFeed(ABC):
    """Abstract source of ticker snapshots.

    The caller owns the polling cadence; a feed only answers with the
    latest board when asked.
    """

    @abstractmethod
    def fetch_ticker(self) -> list[TickerEntry]:
        """Get the current ticker board.

        Returns:
            Current entry for every tracked instrument.

        Raises:
            FeedError: If the board is unavailable.
        """
        pass


def to_snapshot(entries: list[TickerEntry]) -> list[tuple[str, float]]:
    """Convert ticker entries to (instrument_id, price) pairs."""
    return [(entry.id, entry.price) for entry in entries]
