# src/fxconvert/shared/validators.py
"""
Input Validation Utilities - Request and Configuration Validation

This module provides validation helpers for request parameters (currency
codes, amounts) and configuration values (cron expressions, time zones).

Files that USE this module:
- fxconvert.config.settings (cron and time zone field validators)
- fxconvert.adapters.http.api (currency code and amount validation)
- fxconvert.adapters.scheduler.jobs (cron_fields for trigger construction)

Files that this module USES:
- fxconvert.domain.errors (InputValidationError)
- apscheduler (CronTrigger to validate cron fields)
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.triggers.cron import CronTrigger

from fxconvert.domain.errors import InputValidationError
from fxconvert.domain.models import MAX_JSON_NUMBER

CURRENCY_CODE_LENGTH = 3

# Plain decimal notation: digits with an optional fraction, no exponent or separators
_AMOUNT_RE = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")

_CRON_FIELDS_5 = ("minute", "hour", "day", "month", "day_of_week")
_CRON_FIELDS_6 = ("second",) + _CRON_FIELDS_5


def validate_currency_code(code: Optional[str]) -> bool:
    """
    Validate currency code shape.

    Only the length is checked here; whether the code exists is decided
    against the current rate snapshot.

    Args:
        code: Currency code to validate

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False
    return len(code.strip()) == CURRENCY_CODE_LENGTH


def parse_amount(raw: Optional[str]) -> Decimal:
    """
    Parse a request amount into a Decimal.

    Args:
        raw: Amount as received in the query string

    Returns:
        Non-negative Decimal no larger than MAX_JSON_NUMBER

    Raises:
        InputValidationError: If the amount is missing, not in plain decimal
            notation, negative or out of range
    """
    if raw is None or not str(raw).strip():
        raise InputValidationError("Invalid amount format: amount is required")
    text = str(raw).strip()
    if not _AMOUNT_RE.match(text):
        raise InputValidationError(f"Invalid amount format: {raw!r}")
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InputValidationError(f"Invalid amount format: {raw!r}") from None
    if amount < 0:
        raise InputValidationError("Amount must be non-negative")
    if amount > MAX_JSON_NUMBER:
        raise InputValidationError(f"Invalid amount format: {raw!r} is out of range")
    return amount


def cron_fields(expression: str) -> Dict[str, str]:
    """
    Split a cron expression into APScheduler CronTrigger keyword arguments.

    Accepts the classic 5-field crontab form (minute hour day month weekday)
    and the 6-field form with a leading seconds field (e.g. "0 0 15 * * *").

    Raises:
        ValueError: If the expression does not have 5 or 6 fields
    """
    parts = expression.split()
    if len(parts) == 5:
        return dict(zip(_CRON_FIELDS_5, parts))
    if len(parts) == 6:
        return dict(zip(_CRON_FIELDS_6, parts))
    raise ValueError(
        f"Cron expression must have 5 or 6 fields, got {len(parts)}: {expression!r}"
    )


def validate_cron_expression(expression: str) -> bool:
    """
    Validate a cron expression.

    Returns:
        True if APScheduler accepts it, False otherwise
    """
    if not expression or expression.isspace():
        return False
    try:
        CronTrigger(**cron_fields(expression), timezone="UTC")
    except ValueError:
        return False
    return True


def validate_timezone(name: str) -> bool:
    """
    Validate an IANA time zone name.

    Returns:
        True if the zone is known, False otherwise
    """
    if not name:
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
