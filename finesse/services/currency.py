"""
Currency exchange-rate service using the Frankfurter API.

Rates are cached per currency pair in an injected RateCache. A failed rate
lookup raises CurrencyServiceError; a 1:1 rate is never assumed.
"""

import logging
import threading
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple

import requests

from finesse.config import get_settings

logger = logging.getLogger(__name__)


class CurrencyServiceError(Exception):
    """Raised when an exchange rate cannot be retrieved."""


@dataclass(frozen=True)
class Currency:
    code: str
    name: str


DEFAULT_CURRENCIES = [Currency(code="USD", name="United States Dollar")]


class RateCache:
    """
    Time-bounded cache of exchange rates keyed by currency pair.

    Safe to share between request threads.

    Args:
        ttl_seconds: How long a cached rate stays valid
        clock: Callable returning the current time in seconds
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[Tuple[str, str], Tuple[float, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: Tuple[str, str]) -> Optional[float]:
        now = self.clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            rate, fetched_at = entry
            if now - fetched_at >= self.ttl_seconds:
                self._entries.pop(key, None)
                return None
            return rate

    def set(self, key: Tuple[str, str], rate: float) -> None:
        now = self.clock()
        with self._lock:
            self._entries[key] = (rate, now)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class CurrencyService:
    """Exchange-rate lookups and conversions backed by a remote rate API."""

    def __init__(
        self,
        base_url: str,
        cache: RateCache,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self.session = session or requests.Session()
        self.timeout = timeout
        self._currencies: Optional[List[Currency]] = None

    def get_available_currencies(self) -> List[Currency]:
        """
        List the currencies supported by the rate API.

        Falls back to USD only if the list cannot be fetched.
        """
        if self._currencies is not None:
            return self._currencies

        try:
            response = self.session.get(f"{self.base_url}/currencies", timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching currencies: {str(e)}")
            return list(DEFAULT_CURRENCIES)

        self._currencies = [Currency(code=code, name=name) for code, name in data.items()]
        return self._currencies

    def get_exchange_rate(self, from_code: str, to_code: str) -> float:
        """
        Get the rate converting one unit of from_code into to_code.

        Args:
            from_code: Source currency code (e.g. "USD")
            to_code: Target currency code (e.g. "EUR")

        Returns:
            Exchange rate

        Raises:
            CurrencyServiceError: If the rate cannot be retrieved
        """
        if from_code == to_code:
            return 1.0

        key = (from_code, to_code)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Exchange rate cache hit for {from_code}-{to_code}")
            return cached

        try:
            response = self.session.get(
                f"{self.base_url}/latest",
                params={"amount": 1, "from": from_code, "to": to_code},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            rate = float(data["rates"][to_code])
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.error(f"Error fetching exchange rate {from_code}-{to_code}: {str(e)}")
            raise CurrencyServiceError(
                f"Failed to get exchange rate from {from_code} to {to_code}: {e}"
            ) from e

        logger.info(f"Fetched exchange rate {from_code}-{to_code}: {rate}")
        self.cache.set(key, rate)
        return rate

    def convert_amount(self, amount: float, from_code: str, to_code: str) -> float:
        """Convert a single amount between currencies."""
        if from_code == to_code:
            return amount
        return amount * self.get_exchange_rate(from_code, to_code)

    def convert_amounts(
        self, amounts: Dict[str, float], from_code: str, to_code: str
    ) -> Dict[str, float]:
        """Convert every value of a mapping with a single rate lookup."""
        if from_code == to_code:
            return dict(amounts)

        rate = self.get_exchange_rate(from_code, to_code)
        return {key: value * rate for key, value in amounts.items()}


@lru_cache()
def get_currency_service() -> CurrencyService:
    """Build the currency service from settings (FastAPI dependency)."""
    settings = get_settings()
    return CurrencyService(
        base_url=settings.currency_api_url,
        cache=RateCache(ttl_seconds=settings.currency_cache_ttl_seconds),
        timeout=settings.currency_request_timeout,
    )
