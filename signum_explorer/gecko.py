"""Cached SIGNA and BTC quotes from the CoinGecko API."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from .api_client import ApiError, JsonApiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeckoQuote:
    btc: float = 0.0
    btc_24h_change: float = 0.0
    usd: float = 0.0
    usd_24h_change: float = 0.0

    @classmethod
    def from_json(cls, data: Any) -> "GeckoQuote":
        data = data or {}
        return cls(
            btc=float(data.get("btc") or 0.0),
            btc_24h_change=float(data.get("btc_24h_change") or 0.0),
            usd=float(data.get("usd") or 0.0),
            usd_24h_change=float(data.get("usd_24h_change") or 0.0),
        )


class GeckoClient:
    """Fetches quotes and keeps them for ``cache_ttl`` (a timedelta or seconds)."""

    def __init__(self, host: str, cache_ttl: timedelta | float):
        self._api = JsonApiClient(host)
        self.cache_ttl = (
            cache_ttl.total_seconds() if isinstance(cache_ttl, timedelta) else float(cache_ttl)
        )
        self._lock = threading.Lock()
        self._last_request: float | None = None
        self._bitcoin = GeckoQuote()
        self._signum = GeckoQuote()

    def _is_fresh(self) -> bool:
        return (
            self._last_request is not None
            and time.monotonic() - self._last_request <= self.cache_ttl
        )

    def _update_listings(self) -> None:
        data = self._api.request(
            "GET",
            "/simple/price",
            {"ids": "signum,bitcoin", "vs_currencies": "btc,usd", "include_24hr_change": "true"},
        )
        if not isinstance(data, dict):
            raise ApiError(f"unexpected price listing: {data!r}")
        self._bitcoin = GeckoQuote.from_json(data.get("bitcoin"))
        self._signum = GeckoQuote.from_json(data.get("signum"))
        self._last_request = time.monotonic()

    def get_prices(self) -> dict[str, GeckoQuote]:
        """Return quotes keyed by ``BTC`` and ``SIGNA``, refreshing when stale."""
        with self._lock:
            if not self._is_fresh():
                try:
                    self._update_listings()
                except ApiError as exc:
                    logger.error("Update Gecko listings error: %s", exc)
            return {"BTC": self._bitcoin, "SIGNA": self._signum}