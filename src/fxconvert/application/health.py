# src/fxconvert/application/health.py
"""
Health Checker - Service Liveness Reporting

This module reports the cache backend's liveness and the date of the last
stored snapshot. It never raises: an unreachable backend is reported as
unhealthy so the health endpoint can always answer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fxconvert.adapters.persistence.redis_store import RateStore

logger = logging.getLogger(__name__)


@dataclass
class HealthStatus:
    """Represents the health status of a component."""
    is_healthy: bool
    message: str


@dataclass
class HealthReport:
    store: HealthStatus
    last_update: Optional[str]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": "ok",
            "redis": "healthy" if self.store.is_healthy else "unhealthy",
            "last_update": self.last_update,
        }


class HealthChecker:
    """Health checks against the rate store."""

    def __init__(self, store: RateStore):
        self.store = store

    def check_store(self) -> HealthStatus:
        """Ping the cache backend."""
        try:
            self.store.health_check()
            return HealthStatus(
                is_healthy=True,
                message="Redis healthy",
            )
        except Exception as e:
            logger.error("Redis health check failed: %s", e)
            return HealthStatus(
                is_healthy=False,
                message=f"Redis error: {e}",
            )

    def last_update(self) -> Optional[str]:
        """Date of the last stored snapshot, or None if unknown or unreachable."""
        try:
            return self.store.get_last_update_date()
        except Exception as e:
            logger.warning("Could not read last update date: %s", e)
            return None

    def report(self) -> HealthReport:
        store_status = self.check_store()
        report = HealthReport(store=store_status, last_update=self.last_update())
        logger.debug("Health check: %s, last update %s", store_status.message, report.last_update)
        return report
