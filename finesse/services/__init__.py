"""
Application services module.
"""

from finesse.services.currency import (
    CurrencyService,
    CurrencyServiceError,
    RateCache,
    get_currency_service,
)

__all__ = ["CurrencyService", "CurrencyServiceError", "RateCache", "get_currency_service"]
