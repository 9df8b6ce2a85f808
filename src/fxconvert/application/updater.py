# src/fxconvert/application/updater.py
"""
Update Pipeline - Fetch, Validate and Store Rate Snapshots

This module orchestrates one update run: fetch the upstream snapshot (the
provider validates it while parsing) and overwrite the cached copy.

Each run is self-contained. A failed fetch or store is logged and recorded,
the previously cached snapshot stays in place, and the next trigger simply
tries again. Runs may interleave safely because the store overwrites
(last write wins).

State machine per run: IDLE -> FETCHING -> STORED | FAILED -> IDLE

Files that USE this module:
- fxconvert.adapters.scheduler.jobs (RateScheduler runs the pipeline)
- fxconvert.app (builds the pipeline)
- tests.test_updater (unit tests)

Files that this module USES:
- fxconvert.adapters.providers.base (RateProvider interface)
- fxconvert.adapters.persistence.redis_store (RateStore interface)
- fxconvert.domain (RateSet, DomainError)
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from fxconvert.adapters.persistence.redis_store import RateStore
from fxconvert.adapters.providers.base import RateProvider
from fxconvert.domain.errors import DomainError
from fxconvert.domain.models import RateSet

logger = logging.getLogger(__name__)


class UpdateState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    STORED = "stored"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a single update run."""
    state: UpdateState
    started_at: datetime
    finished_at: datetime
    date: Optional[str] = None
    rate_count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state is UpdateState.STORED


class RateUpdatePipeline:
    """Runs fetch -> store and keeps track of the outcome of recent runs."""

    def __init__(self, provider: RateProvider, store: RateStore):
        self.provider = provider
        self.store = store
        self._lock = threading.Lock()
        self._state = UpdateState.IDLE
        self._last_result: Optional[UpdateResult] = None
        self._last_success_at: Optional[datetime] = None
        self._success_count = 0
        self._failure_count = 0

    @property
    def state(self) -> UpdateState:
        return self._state

    @property
    def last_result(self) -> Optional[UpdateResult]:
        return self._last_result

    @property
    def last_success_at(self) -> Optional[datetime]:
        return self._last_success_at

    @property
    def success_count(self) -> int:
        return self._success_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def update_rates(self) -> RateSet:
        """
        Fetch the latest snapshot and store it.

        Returns:
            The stored RateSet

        Raises:
            FetchError, ParseError: From the provider
            StoreError: From the store
        """
        logger.info("Fetching latest exchange rates")
        rate_set = self.provider.fetch_rates()
        logger.info("Fetched %d exchange rates for %s", len(rate_set.rates), rate_set.date)
        self.store.store(rate_set)
        logger.info("Exchange rates updated successfully")
        return rate_set

    def run(self) -> UpdateResult:
        """
        Perform one update run without raising.

        Returns:
            UpdateResult describing the run (state STORED or FAILED)
        """
        started_at = datetime.now(timezone.utc)
        self._set_state(UpdateState.FETCHING)
        try:
            rate_set = self.update_rates()
        except DomainError as e:
            logger.error("Exchange rate update failed (%s): %s", type(e).__name__, e.detail)
            result = self._finish(started_at, UpdateState.FAILED, error=f"{type(e).__name__}: {e.detail}")
        except Exception as e:
            logger.exception("Unexpected error during exchange rate update: %s", e)
            result = self._finish(started_at, UpdateState.FAILED, error=f"{type(e).__name__}: {e}")
        else:
            result = self._finish(
                started_at,
                UpdateState.STORED,
                date=rate_set.date,
                rate_count=len(rate_set.rates),
            )
        return result

    def _set_state(self, state: UpdateState) -> None:
        with self._lock:
            self._state = state

    def _finish(self, started_at: datetime, state: UpdateState, **fields) -> UpdateResult:
        result = UpdateResult(
            state=state,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            **fields,
        )
        with self._lock:
            if state is UpdateState.STORED:
                self._success_count += 1
                self._last_success_at = result.finished_at
            else:
                self._failure_count += 1
            self._last_result = result
            self._state = UpdateState.IDLE
        return result
