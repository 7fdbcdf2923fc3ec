"""Price snapshot sources for VBOX Trade."""

from vboxtrade.feeds.base import FeedError, PriceFeed, to_snapshot
from vboxtrade.feeds.paper import PaperFeed
from vboxtrade.feeds.ticker import TickerClient

__all__ = [
    "FeedError",
    "PaperFeed",
    "PriceFeed",
    "TickerClient",
    "to_snapshot",
]
