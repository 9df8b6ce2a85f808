# src/fxconvert/application/converter.py
"""
Converter - Cross-rate and Rebase Arithmetic

Pure functions over a RateSet. All math is Decimal; decimal signals
(division by zero, invalid operation, overflow) are translated into
CalculationError.

Example (base EUR, USD=1.05, JPY=158.2):
    USD→JPY cross rate = 158.2 / 1.05 = 150.666…
    rebase to USD gives EUR = 1 / 1.05 and drops USD from the table

Files that USE this module:
- fxconvert.application.rates_service (convert and rebase for API requests)
- tests.test_converter (unit tests)

Files that this module USES:
- fxconvert.domain.models (RateSet)
- fxconvert.domain.errors (CurrencyNotFoundError, CalculationError)
"""
from __future__ import annotations

from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow
from typing import Tuple

from fxconvert.domain.errors import CalculationError, CurrencyNotFoundError
from fxconvert.domain.models import MAX_JSON_NUMBER, RateSet

# Arithmetic failures we report as CalculationError
_DECIMAL_FAILURES = (DivisionByZero, InvalidOperation, Overflow, ZeroDivisionError)


def _resolve(rate_set: RateSet, code: str) -> Decimal:
    rate = rate_set.rate_for(code)
    if rate is None:
        raise CurrencyNotFoundError(code)
    return rate


def _ensure_representable(value: Decimal, what: str) -> Decimal:
    if abs(value) > MAX_JSON_NUMBER:
        raise CalculationError(f"Overflow: {what} {value:.6E} exceeds the representable range")
    return value


def convert(
    rate_set: RateSet, from_currency: str, to_currency: str, amount: Decimal
) -> Tuple[Decimal, Decimal]:
    """
    Convert an amount between two currencies using their base-relative rates.

    Computes the cross rate directly as rate(to) / rate(from) instead of
    rebasing the whole table.

    Args:
        rate_set: Snapshot to convert with
        from_currency: Source code (case-insensitive)
        to_currency: Target code (case-insensitive)
        amount: Non-negative amount in the source currency

    Returns:
        Tuple of (converted amount, cross rate)

    Raises:
        CurrencyNotFoundError: If either code is missing from the snapshot
        CalculationError: On division by zero or overflow
    """
    from_currency = from_currency.strip().upper()
    to_currency = to_currency.strip().upper()
    _ensure_representable(amount, "amount")

    if from_currency == to_currency:
        return amount, Decimal(1)

    rate_from = _resolve(rate_set, from_currency)
    rate_to = _resolve(rate_set, to_currency)

    try:
        cross_rate = rate_to / rate_from
    except _DECIMAL_FAILURES as e:
        raise CalculationError(
            f"Division by zero or overflow converting {from_currency} to {to_currency}: {e!r}"
        ) from e

    try:
        result = amount * cross_rate
    except _DECIMAL_FAILURES as e:
        raise CalculationError(f"Overflow in amount calculation: {e!r}") from e

    _ensure_representable(cross_rate, "rate")
    _ensure_representable(result, "result")
    return result, cross_rate


def rebase(rate_set: RateSet, new_base: str) -> RateSet:
    """
    Re-express a whole rate table against a different base currency.

    The old base is added with rate 1 / rate(new_base); the new base is
    dropped from the table so it stays the implicit base of the result.

    Raises:
        CurrencyNotFoundError: If new_base is not in the snapshot
        CalculationError: If rate(new_base) is zero or a rebased rate overflows
    """
    new_base = new_base.strip().upper()

    if new_base == rate_set.base:
        return rate_set.copy()

    base_rate = rate_set.rates.get(new_base)
    if base_rate is None:
        raise CurrencyNotFoundError(new_base)

    try:
        new_rates = {rate_set.base: Decimal(1) / base_rate}
        for currency, rate in rate_set.rates.items():
            if currency == new_base:
                continue
            new_rates[currency] = rate / base_rate
    except _DECIMAL_FAILURES as e:
        raise CalculationError(f"Division error rebasing to {new_base}: {e!r}") from e

    for currency, rate in new_rates.items():
        _ensure_representable(rate, f"rebased rate for {currency}")

    return RateSet(date=rate_set.date, base=new_base, rates=new_rates)
