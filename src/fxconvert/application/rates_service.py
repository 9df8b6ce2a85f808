# src/fxconvert/application/rates_service.py
"""
Rates Service - Read Side of the Rate Cache

This module answers the questions the HTTP API asks: the latest table
(optionally rebased) and single conversions. It reads the current snapshot
from the store and delegates the arithmetic to the converter.

Files that USE this module:
- fxconvert.adapters.http.api (latest-rate and convert endpoints)
- tests.test_rates_service (unit tests)

Files that this module USES:
- fxconvert.adapters.persistence.redis_store (RateStore interface)
- fxconvert.application.converter (convert, rebase)
- fxconvert.domain (RateSet, NoRatesAvailableError)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from fxconvert.adapters.persistence.redis_store import RateStore
from fxconvert.application.converter import convert, rebase
from fxconvert.domain.errors import NoRatesAvailableError
from fxconvert.domain.models import RateSet

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversion:
    """Result of converting an amount between two currencies."""
    from_currency: str
    to_currency: str
    amount: Decimal
    result: Decimal
    rate: Decimal
    date: str


class RatesService:
    """
    High-level service over the latest cached snapshot.
    """
    def __init__(self, store: RateStore):
        """
        Initialize rates service with a store.

        Args:
            store: RateStore holding the latest snapshot
        """
        self.store = store

    def _current(self) -> RateSet:
        rate_set = self.store.get_latest()
        if rate_set is None:
            raise NoRatesAvailableError()
        return rate_set

    def latest(self, base: Optional[str] = None) -> RateSet:
        """
        Get the latest snapshot, rebased if a base currency is given.

        Raises:
            NoRatesAvailableError: If the cache is empty
            CurrencyNotFoundError: If base is not in the snapshot
        """
        rate_set = self._current()
        if base:
            return rebase(rate_set, base)
        return rate_set

    def convert(self, from_currency: str, to_currency: str, amount: Decimal) -> Conversion:
        """
        Convert an amount using the latest snapshot.

        Raises:
            NoRatesAvailableError: If the cache is empty
            CurrencyNotFoundError: If either code is not in the snapshot
            CalculationError: On division by zero or overflow
        """
        rate_set = self._current()
        result, rate = convert(rate_set, from_currency, to_currency, amount)
        log.debug("Converted %s %s to %s at %s", amount, from_currency, to_currency, rate)
        return Conversion(
            from_currency=from_currency.strip().upper(),
            to_currency=to_currency.strip().upper(),
            amount=amount,
            result=result,
            rate=rate,
            date=rate_set.date,
        )
