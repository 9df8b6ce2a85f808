# src/fxconvert/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from fxconvert.shared.validators import (
    cron_fields,
    parse_amount,
    validate_cron_expression,
    validate_currency_code,
    validate_timezone,
)
from fxconvert.shared.logging_conf import request_id_ctx, setup_logging

__all__ = [
    "cron_fields",
    "parse_amount",
    "validate_cron_expression",
    "validate_currency_code",
    "validate_timezone",
    "request_id_ctx",
    "setup_logging",
]
