# src/fxconvert/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains the RateSet model: one dated snapshot of exchange
rates expressed against a single base currency.

Invariants enforced on construction:
- date parses as YYYY-MM-DD
- base and every rate key are three-letter uppercase codes
- base is never a key of rates (its rate is implicitly 1)
- rates is non-empty and every value is a finite, non-negative Decimal
  no larger than MAX_JSON_NUMBER

Files that USE this module:
- fxconvert.application.* (converter, services and pipeline use RateSet)
- fxconvert.adapters.* (providers build it, persistence serializes it)
- tests.* (tests build RateSets as fixtures)

Files that this module USES:
- fxconvert.domain.errors (InvalidRateSetError, InvalidRateError)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Tuple

from fxconvert.domain.errors import InvalidRateError, InvalidRateSetError

DATE_FORMAT = "%Y-%m-%d"

_CODE_RE = re.compile(r"^[A-Z]{3}$")

# Largest magnitude that still renders as a finite JSON number
MAX_JSON_NUMBER = Decimal(sys.float_info.max)


def parse_rate(currency: str, raw: Any) -> Decimal:
    """
    Parse a single rate value into a Decimal.

    Args:
        currency: Currency code the rate belongs to (used in the error)
        raw: Rate as string (or Decimal/int)

    Returns:
        Finite, non-negative Decimal

    Raises:
        InvalidRateError: If the value is not a number, is NaN/Infinity, is negative
            or is too large to render as a JSON number
    """
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise InvalidRateError(currency, f"invalid decimal {raw!r}") from None
    if not value.is_finite():
        raise InvalidRateError(currency, f"non-finite value {raw!r}")
    if value < 0:
        raise InvalidRateError(currency, f"negative value {raw!r}")
    if value > MAX_JSON_NUMBER:
        raise InvalidRateError(currency, f"value out of range {raw!r}")
    return value


@dataclass(frozen=True)
class RateSet:
    """
    One day's exchange-rate snapshot.

    Attributes:
        date: Snapshot date as YYYY-MM-DD
        base: Currency all rates are expressed against
        rates: Units of each currency per one unit of base (base excluded)
    """
    date: str
    base: str
    rates: dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        try:
            datetime.strptime(self.date, DATE_FORMAT)
        except (TypeError, ValueError) as e:
            raise InvalidRateSetError(f"Invalid date format {self.date!r}: {e}") from None
        if not isinstance(self.base, str) or not _CODE_RE.match(self.base):
            raise InvalidRateSetError(f"Invalid base currency {self.base!r}")
        if not self.rates:
            raise InvalidRateSetError(f"Rate table for {self.date} is empty")
        if self.base in self.rates:
            raise InvalidRateSetError(f"Base currency {self.base} must not appear in rates")
        for code, value in self.rates.items():
            if not _CODE_RE.match(code):
                raise InvalidRateSetError(f"Invalid currency code {code!r}")
            if not isinstance(value, Decimal) or not value.is_finite():
                raise InvalidRateError(code, f"invalid value {value!r}")
            if not 0 <= value <= MAX_JSON_NUMBER:
                raise InvalidRateError(code, f"value out of range {value!r}")

    @classmethod
    def from_feed(
        cls, date: str, entries: Iterable[Tuple[str, Any]], base: str
    ) -> RateSet:
        """
        Build a RateSet from raw (currency, rate) pairs as reported by a feed.

        Codes are uppercased, duplicates overwrite (last wins) and an explicit
        entry for the base currency is dropped.

        Raises:
            InvalidRateError: If any rate fails to parse (names the currency)
            InvalidRateSetError: If the date, base or resulting table is invalid
        """
        base = base.strip().upper()
        rates: dict[str, Decimal] = {}
        for currency, raw in entries:
            code = str(currency).strip().upper()
            value = parse_rate(code, raw)
            if code == base:
                continue
            rates[code] = value
        return cls(date=date, base=base, rates=rates)

    def rate_for(self, code: str) -> Decimal | None:
        """Return the base-relative rate of a code (1 for the base itself), or None."""
        if code == self.base:
            return Decimal(1)
        return self.rates.get(code)

    def copy(self) -> RateSet:
        # Decimals are immutable, so a fresh dict is a deep copy.
        return RateSet(date=self.date, base=self.base, rates=dict(self.rates))

    def to_json(self) -> dict:
        """
        Convert RateSet to a JSON-serializable dictionary.

        Rates are written as decimal strings so they survive a round-trip
        through the cache without binary floating point drift.
        """
        return {
            "date": self.date,
            "base": self.base,
            "rates": {code: str(value) for code, value in self.rates.items()},
        }

    @staticmethod
    def from_json(data: Mapping[str, Any]) -> RateSet:
        """
        Create RateSet from a dictionary produced by to_json().

        Raises:
            InvalidRateSetError: If fields are missing or invalid
        """
        try:
            date = data["date"]
            base = data["base"]
            raw_rates = data["rates"]
        except (KeyError, TypeError) as e:
            raise InvalidRateSetError(f"Malformed rate snapshot: missing {e}") from None
        if not isinstance(raw_rates, Mapping):
            raise InvalidRateSetError("Malformed rate snapshot: 'rates' is not a mapping")
        rates = {code: parse_rate(code, raw) for code, raw in raw_rates.items()}
        return RateSet(date=date, base=base, rates=rates)
