# src/fxconvert/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from fxconvert.domain.models import MAX_JSON_NUMBER, RateSet, parse_rate
from fxconvert.domain.errors import (
    CalculationError,
    CurrencyNotFoundError,
    DomainError,
    FetchError,
    InputValidationError,
    InternalError,
    InvalidRateError,
    InvalidRateSetError,
    NoRatesAvailableError,
    ParseError,
    StoreError,
)

__all__ = [
    "RateSet",
    "parse_rate",
    "MAX_JSON_NUMBER",
    "DomainError",
    "InvalidRateSetError",
    "InvalidRateError",
    "CurrencyNotFoundError",
    "NoRatesAvailableError",
    "InputValidationError",
    "FetchError",
    "ParseError",
    "StoreError",
    "CalculationError",
    "InternalError",
]
