# src/fxconvert/adapters/providers/base.py
"""
Base Provider Interface for Exchange Rate Feeds

This module defines the abstract base class for upstream rate feeds.
It establishes the contract the update pipeline relies on.

Files that USE this module:
- fxconvert.adapters.providers.ecb (EcbRateProvider implements RateProvider)
- fxconvert.application.updater (pipeline depends on RateProvider)

Files that this module USES:
- fxconvert.domain.models (RateSet)
"""
from abc import ABC, abstractmethod

from fxconvert.domain.models import RateSet


class RateProvider(ABC):
    @abstractmethod
    def fetch_rates(self) -> RateSet:
        """
        Return the feed's current snapshot.

        Raises:
            FetchError: On transport failure or non-success status
            ParseError: On malformed payload
        """
        raise NotImplementedError
