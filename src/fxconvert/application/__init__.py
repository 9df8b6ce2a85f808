# src/fxconvert/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains application services that orchestrate domain logic.
Adapters are reached only through their interfaces (RateProvider, RateStore).
"""

from fxconvert.application.converter import convert, rebase
from fxconvert.application.health import HealthChecker, HealthStatus
from fxconvert.application.rates_service import Conversion, RatesService
from fxconvert.application.updater import RateUpdatePipeline, UpdateResult, UpdateState

__all__ = [
    "convert",
    "rebase",
    "Conversion",
    "RatesService",
    "HealthChecker",
    "HealthStatus",
    "RateUpdatePipeline",
    "UpdateResult",
    "UpdateState",
]
