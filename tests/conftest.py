# tests/conftest.py
"""
Shared Test Fixtures

Provides a reference RateSet and an in-memory RateStore so service and API
tests run without Redis or network access.
"""
from decimal import Decimal
from typing import Optional

import pytest

from fxconvert.adapters.persistence.redis_store import RateStore
from fxconvert.domain.errors import StoreError
from fxconvert.domain.models import RateSet


class InMemoryRateStore(RateStore):
    """RateStore kept in a dict; mirrors the Redis key layout."""

    def __init__(self, rate_set: Optional[RateSet] = None):
        self.latest: Optional[RateSet] = None
        self.date: Optional[str] = None
        self.store_calls = 0
        if rate_set is not None:
            self.store(rate_set)

    def store(self, rate_set: RateSet) -> None:
        self.store_calls += 1
        self.latest = rate_set.copy()
        self.date = rate_set.date

    def get_latest(self) -> Optional[RateSet]:
        return self.latest.copy() if self.latest else None

    def get_last_update_date(self) -> Optional[str]:
        return self.date

    def health_check(self) -> None:
        return None


class UnreachableRateStore(RateStore):
    """RateStore whose backend is down."""

    def store(self, rate_set: RateSet) -> None:
        raise StoreError("connection refused")

    def get_latest(self) -> Optional[RateSet]:
        raise StoreError("connection refused")

    def get_last_update_date(self) -> Optional[str]:
        raise StoreError("connection refused")

    def health_check(self) -> None:
        raise StoreError("connection refused")


@pytest.fixture
def eur_rates() -> RateSet:
    return RateSet(
        date="2024-12-04",
        base="EUR",
        rates={
            "USD": Decimal("1.05"),
            "GBP": Decimal("0.85"),
            "JPY": Decimal("158.2"),
        },
    )


@pytest.fixture
def memory_store(eur_rates) -> InMemoryRateStore:
    return InMemoryRateStore(eur_rates)


@pytest.fixture
def empty_store() -> InMemoryRateStore:
    return InMemoryRateStore()


@pytest.fixture
def unreachable_store() -> UnreachableRateStore:
    return UnreachableRateStore()
