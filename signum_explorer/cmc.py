"""Cached SIGNA and BTC quotes from the CoinMarketCap API."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from .api_client import ApiError, JsonApiClient

logger = logging.getLogger(__name__)

# The free plan allows roughly one request per five minutes.
SYMBOLS = ("BTC", "SIGNA")


@dataclass(frozen=True)
class CmcQuote:
    price: float = 0.0
    percent_change_24h: float = 0.0

    @classmethod
    def from_json(cls, data: Any) -> "CmcQuote":
        data = data or {}
        return cls(
            price=float(data.get("price") or 0.0),
            percent_change_24h=float(data.get("percent_change_24h") or 0.0),
        )


class CmcClient:
    """Fetches listings and keeps quotes for ``cache_ttl`` (a timedelta or seconds)."""

    def __init__(self, api_key: str, host: str, free_limit: int, cache_ttl: timedelta | float):
        self._api = JsonApiClient(host, {"X-CMC_PRO_API_KEY": api_key})
        self.free_limit = free_limit
        self.cache_ttl = (
            cache_ttl.total_seconds() if isinstance(cache_ttl, timedelta) else float(cache_ttl)
        )
        self._lock = threading.Lock()
        self._last_request: float | None = None
        self._cached = {symbol: CmcQuote() for symbol in SYMBOLS}

    def _is_fresh(self) -> bool:
        return (
            self._last_request is not None
            and time.monotonic() - self._last_request <= self.cache_ttl
        )

    def _get_listings(self, start: int) -> list[dict]:
        data = self._api.request(
            "GET",
            "/cryptocurrency/listings/latest",
            {
                "start": str(start),
                "limit": str(self.free_limit),
                "convert": "USD",
                "cryptocurrency_type": "coins",
            },
        )
        entries = data.get("data") if isinstance(data, dict) else None
        if not isinstance(entries, list) or not entries:
            raise ApiError("empty listings data")
        return entries

    def _update_cached_values(self, entries: list[dict]) -> bool:
        all_found = True
        for symbol in self._cached:
            match = next((entry for entry in entries if entry.get("symbol") == symbol), None)
            if match is None:
                all_found = False
                continue
            self._cached[symbol] = CmcQuote.from_json((match.get("quote") or {}).get("USD"))
        return all_found

    def _update_listings(self) -> None:
        if not self._update_cached_values(self._get_listings(1)):
            logger.warning(
                "Not all symbols have been found in a first %s coins, will request more coins",
                self.free_limit,
            )
            self._update_cached_values(self._get_listings(self.free_limit))
        self._last_request = time.monotonic()

    def get_prices(self) -> dict[str, CmcQuote]:
        """Return quotes keyed by ``BTC`` and ``SIGNA``, refreshing when stale."""
        with self._lock:
            if not self._is_fresh():
                try:
                    self._update_listings()
                except ApiError as exc:
                    logger.error("Update CMC listings error: %s", exc)
            return {symbol: self._cached[symbol] for symbol in SYMBOLS}