# tests/test_rates_service.py
"""
Rates Service Tests - Unit Tests for the Read Side of the Cache

This module tests RatesService: latest table lookups (optionally rebased),
conversions against the cached snapshot and the empty-cache case.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxconvert.application.rates_service (RatesService, Conversion)
- fxconvert.domain.errors (NoRatesAvailableError, CurrencyNotFoundError, StoreError)
- tests.conftest (memory_store, empty_store, unreachable_store fixtures)
- pytest (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from decimal import Decimal  # Exact decimal arithmetic for expected values

from fxconvert.application.rates_service import Conversion, RatesService
from fxconvert.domain.errors import CurrencyNotFoundError, NoRatesAvailableError, StoreError


class TestLatest:
    def test_returns_cached_snapshot(self, memory_store, eur_rates):
        assert RatesService(memory_store).latest() == eur_rates

    def test_rebased(self, memory_store):
        result = RatesService(memory_store).latest("USD")
        assert result.base == "USD"
        assert result.rates["EUR"] == Decimal(1) / Decimal("1.05")

    def test_native_base_requested(self, memory_store, eur_rates):
        assert RatesService(memory_store).latest("EUR") == eur_rates

    def test_unknown_base(self, memory_store):
        with pytest.raises(CurrencyNotFoundError):
            RatesService(memory_store).latest("XXX")

    def test_empty_cache(self, empty_store):
        with pytest.raises(NoRatesAvailableError):
            RatesService(empty_store).latest()

    def test_store_failure_propagates(self, unreachable_store):
        with pytest.raises(StoreError):
            RatesService(unreachable_store).latest()


class TestConvert:
    def test_conversion(self, memory_store):
        conversion = RatesService(memory_store).convert("usd", "jpy", Decimal("100"))

        assert isinstance(conversion, Conversion)
        assert conversion.from_currency == "USD"
        assert conversion.to_currency == "JPY"
        assert conversion.amount == Decimal("100")
        assert conversion.rate == Decimal("158.2") / Decimal("1.05")
        assert conversion.result == Decimal("100") * conversion.rate
        assert conversion.date == "2024-12-04"

    def test_same_currency(self, memory_store):
        conversion = RatesService(memory_store).convert("GBP", "GBP", Decimal("12.5"))
        assert conversion.result == Decimal("12.5")
        assert conversion.rate == Decimal(1)

    def test_unknown_currency(self, memory_store):
        with pytest.raises(CurrencyNotFoundError):
            RatesService(memory_store).convert("USD", "ZZZ", Decimal("1"))

    def test_empty_cache(self, empty_store):
        with pytest.raises(NoRatesAvailableError):
            RatesService(empty_store).convert("USD", "EUR", Decimal("1"))
