# src/fxconvert/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines the exception taxonomy shared by every layer.
Each adapter raises one of these at its boundary; the HTTP layer is the
only place that turns them into status codes.

Files that USE this module:
- fxconvert.domain.models (InvalidRateSetError, InvalidRateError)
- fxconvert.application.* (converter and services raise these)
- fxconvert.adapters.* (providers/persistence raise, http translates)

Files that this module USES:
- None (pure domain layer)
"""


class DomainError(Exception):
    """Base exception for domain errors."""

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail


class InvalidRateSetError(DomainError):
    """Raised when a rate snapshot violates its invariants (date, base, empty table)."""
    pass


class InvalidRateError(InvalidRateSetError):
    """Raised when a single rate value cannot be parsed or is negative."""

    def __init__(self, currency: str, detail: str):
        super().__init__(f"Failed to parse rate for {currency}: {detail}")
        self.currency = currency


class CurrencyNotFoundError(DomainError):
    """Raised when a currency code is not present in the current snapshot."""

    def __init__(self, code: str):
        super().__init__(f"Currency code '{code}' not found in exchange rates")
        self.code = code


class NoRatesAvailableError(DomainError):
    """Raised when the cache has never been populated."""

    def __init__(self, detail: str = "No exchange rates available. Please try again later."):
        super().__init__(detail)


class InputValidationError(DomainError):
    """Raised when request input is malformed."""
    pass


class FetchError(DomainError):
    """Raised when the upstream feed cannot be retrieved."""
    pass


class ParseError(DomainError):
    """Raised when the upstream payload is malformed."""
    pass


class StoreError(DomainError):
    """Raised when the cache backend fails."""
    pass


class CalculationError(DomainError):
    """Raised on division by zero or overflow during conversion."""
    pass


class InternalError(DomainError):
    """Raised for unexpected internal failures (e.g. corrupt cache entry)."""
    pass
