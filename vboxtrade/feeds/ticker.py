"""VBOX ticker API client."""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from vboxtrade.feeds.base import FeedError, PriceFeed
from vboxtrade.models import TickerEntry

logger = logging.getLogger(__name__)

DEFAULT_PRIMARY_URL = "https://api3.boxfarming.in"
DEFAULT_FALLBACK_URL = "https://v-box-backend.vercel.app"
TICKER_PATH = "/vboxtrade/ticker"


class TickerClient(PriceFeed):
    """Fetches the market ticker, falling back to a secondary host.

    The primary host is tried first; a connection error or non-2xx
    response moves on to the fallback host.
    """

    def __init__(
        self,
        primary_url: str = DEFAULT_PRIMARY_URL,
        fallback_url: Optional[str] = DEFAULT_FALLBACK_URL,
        limit: int = 50,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the ticker client.

        Args:
            primary_url: Base URL of the primary API host.
            fallback_url: Base URL of the fallback host, or None.
            limit: Maximum number of ticker entries to request.
            timeout: Per-request timeout in seconds.
            session: Optional requests session to reuse.
        """
        self._urls = [u.rstrip("/") for u in (primary_url, fallback_url) if u]
        self._limit = limit
        self._timeout = timeout
        self._session = session or requests.Session()

    def _get(self, path: str, params: dict[str, Any]) -> Any:
        """GET a JSON document from the first host that answers."""
        last_error: Optional[Exception] = None
        for base in self._urls:
            url = f"{base}{path}"
            try:
                resp = self._session.get(url, params=params, timeout=self._timeout)
                resp.raise_for_status()
                return resp.json()
            except (requests.RequestException, ValueError) as e:
                logger.warning("Ticker request to %s failed: %s", url, e)
                last_error = e
        raise FeedError(f"Failed to fetch {path}: {last_error}")

    def fetch_ticker(self) -> list[TickerEntry]:
        data = self._get(TICKER_PATH, {"limit": self._limit})
        if not isinstance(data, list):
            raise FeedError("Unexpected ticker payload")

        entries = []
        for item in data:
            try:
                entries.append(TickerEntry.model_validate(item))
            except ValidationError as e:
                logger.debug("Skipping malformed ticker entry %r: %s", item, e)
        return entries
