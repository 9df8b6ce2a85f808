# src/fxconvert/adapters/providers/__init__.py
"""
Provider Adapters - Upstream Feed Clients

This package contains adapters for upstream exchange rate feeds.
All providers implement the RateProvider interface.
"""

from fxconvert.adapters.providers.base import RateProvider
from fxconvert.adapters.providers.ecb import EcbRateProvider, parse_feed

__all__ = [
    "RateProvider",
    "EcbRateProvider",
    "parse_feed",
]
