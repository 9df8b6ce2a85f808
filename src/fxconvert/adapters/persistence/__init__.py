# src/fxconvert/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting the latest rate snapshot:
- Redis storage (latest snapshot + date key)
"""

from fxconvert.adapters.persistence.redis_store import (
    DATE_KEY,
    RATES_KEY,
    RateStore,
    RedisRateStore,
)

__all__ = [
    "RateStore",
    "RedisRateStore",
    "RATES_KEY",
    "DATE_KEY",
]
