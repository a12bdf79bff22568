"""Gold spot-price oracle with a one-hour in-memory cache.

The oracle is created once per application and shared by every request. A
refresh that fails for any reason leaves the previous quote in place, so
callers always get a usable price without waiting longer than the request
timeout.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests

from ..errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

TROY_OUNCE_GRAMS = 31.1035
DEFAULT_GOLD_PRICE_URL = "https://api.metals.live/v1/spot/gold"
DEFAULT_FALLBACK_PRICE = 65.50
DEFAULT_TTL_SECONDS = 3600.0
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class PriceQuote:
    value: float
    fetched_at: float


def _extract_ounce_price(payload: Any) -> float:
    # the provider has answered both with a bare object and a one-element list
    if isinstance(payload, list) and payload:
        payload = payload[0]
    if not isinstance(payload, dict) or "price" not in payload:
        raise UpstreamUnavailable("spot price response has no 'price' field")
    try:
        price = float(payload["price"])
    except (TypeError, ValueError) as exc:
        raise UpstreamUnavailable(f"spot price is not numeric: {payload['price']!r}") from exc
    if not price > 0:
        raise UpstreamUnavailable(f"spot price must be positive, got {price}")
    return price


class GoldPriceOracle:
    """Serve the gold price per gram, refreshing from upstream at most once per TTL."""

    def __init__(
        self,
        url: str = DEFAULT_GOLD_PRICE_URL,
        *,
        fallback: float = DEFAULT_FALLBACK_PRICE,
        ttl: float = DEFAULT_TTL_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.url = url
        self.ttl = ttl
        self.timeout = timeout
        self._session = session or requests.Session()
        self._clock = clock
        self._lock = threading.Lock()
        self._quote = PriceQuote(value=fallback, fetched_at=0.0)

    @property
    def quote(self) -> PriceQuote:
        with self._lock:
            return self._quote

    def is_fresh(self, now: Optional[float] = None) -> bool:
        now = self._clock() if now is None else now
        return now - self.quote.fetched_at < self.ttl

    def refresh(self) -> PriceQuote:
        """Fetch a new quote from upstream and store it.

        Raises :class:`UpstreamUnavailable` when the request fails or the
        response cannot be understood; the cached quote is untouched then.
        """
        try:
            resp = self._session.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise UpstreamUnavailable(f"gold price request failed: {exc}") from exc

        per_gram = _extract_ounce_price(payload) / TROY_OUNCE_GRAMS
        quote = PriceQuote(value=per_gram, fetched_at=self._clock())
        with self._lock:
            self._quote = quote
        logger.info("Gold price refreshed: %.4f per gram", per_gram)
        return quote

    def get_spot_price(self) -> float:
        """Return the cached price, refreshing first when the cache window has passed."""
        if self.is_fresh():
            return self.quote.value
        try:
            return self.refresh().value
        except Exception as exc:
            cached = self.quote.value
            logger.warning("Failed to fetch gold price, using cached value %.4f: %s", cached, exc)
            return cached
