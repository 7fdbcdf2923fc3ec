"""Simulated ticker for offline use."""

import random
from typing import Optional

from vboxtrade.feeds.base import PriceFeed
from vboxtrade.models import TickerEntry

# Default mandi board: id, commodity, variety, emoji, opening price (₹/kg)
DEFAULT_BOARD = [
    ("1", "Tomato", "Hybrid", "🍅", 11.75),
    ("2", "Onion", "Red Onion", "🧅", 18.20),
    ("3", "Potato", "Kufri Jyoti", "🥔", 14.50),
    ("4", "Wheat", "Durum Wheat", "🌾", 22.30),
    ("5", "Rice", "Basmati 1121", "🍚", 28.40),
    ("6", "Cotton", "BT Cotton", "🌱", 65.80),
]


class PaperFeed(PriceFeed):
    """Random-walk ticker over a fixed commodity board.

    Each fetch moves every price by up to volatility_percent of its value.
    """

    DEFAULT_VOLATILITY_PERCENT = 2.0

    def __init__(
        self,
        board: Optional[list[tuple[str, str, str, str, float]]] = None,
        volatility_percent: float = DEFAULT_VOLATILITY_PERCENT,
        seed: Optional[int] = None,
    ):
        """Initialize the paper feed.

        Args:
            board: Rows of (id, commodity, variety, emoji, opening price).
            volatility_percent: Maximum move per fetch, in percent.
            seed: Random seed for reproducible walks.
        """
        self._board = list(board or DEFAULT_BOARD)
        self._volatility_percent = volatility_percent
        self._random = random.Random(seed)
        self._open = {row[0]: row[4] for row in self._board}
        self._prices = dict(self._open)

    def fetch_ticker(self) -> list[TickerEntry]:
        entries = []
        for instrument_id, commodity, variety, emoji, _ in self._board:
            price = self._prices[instrument_id]
            move = self._random.uniform(-1, 1) * self._volatility_percent / 100
            price = round(max(price * (1 + move), 0.01), 2)
            self._prices[instrument_id] = price

            opening = self._open[instrument_id]
            change = price - opening
            entries.append(TickerEntry(
                id=instrument_id,
                commodity=commodity,
                variety=variety,
                emoji=emoji,
                price=price,
                change=round(change, 2),
                change_percent=round(change / opening * 100, 2) if opening else 0.0,
            ))
        return entries
