# src/fxconvert/adapters/scheduler/jobs.py
"""
Scheduler Jobs - Recurring Rate Updates

This module runs the update pipeline once at startup and then on every
tick of a cron schedule, using APScheduler's BackgroundScheduler so the
updates run on their own thread, decoupled from HTTP serving.

Ticks never overlap (max_instances=1) and missed ticks collapse into one
run (coalesce=True). Shutdown cancels pending ticks and, by default, waits
for an in-flight run to finish.

Files that USE this module:
- fxconvert.app (builds RateScheduler from settings)
- fxconvert.adapters.http.api (starts/stops it in the app lifespan)
- tests.test_scheduler (unit tests)

Files that this module USES:
- fxconvert.application.updater (RateUpdatePipeline)
- fxconvert.shared.validators (cron_fields)
"""
from __future__ import annotations

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from fxconvert.application.updater import RateUpdatePipeline
from fxconvert.shared.validators import cron_fields

logger = logging.getLogger(__name__)

UPDATE_JOB_ID = "rate_update"


def build_trigger(expression: str, timezone: str = "UTC") -> CronTrigger:
    """
    Build a CronTrigger from a 5- or 6-field cron expression.

    Raises:
        ValueError: If the expression is malformed
    """
    return CronTrigger(**cron_fields(expression), timezone=timezone)


class RateScheduler:
    """Owns the recurring update job and its start/stop lifecycle."""

    def __init__(
        self,
        pipeline: RateUpdatePipeline,
        cron_expression: str,
        timezone: str = "UTC",
    ):
        self.pipeline = pipeline
        self.cron_expression = cron_expression
        self.trigger = build_trigger(cron_expression, timezone)
        self._scheduler = BackgroundScheduler(timezone=timezone)
        self._scheduler.add_job(
            self._run_update,
            trigger=self.trigger,
            id=UPDATE_JOB_ID,
            name="exchange_rate_update",
            max_instances=1,
            coalesce=True,
            misfire_grace_time=300,
        )

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def next_run_time(self):
        job = self._scheduler.get_job(UPDATE_JOB_ID)
        return job.next_run_time if job else None

    def _run_update(self) -> None:
        logger.info("Starting scheduled exchange rate update")
        result = self.pipeline.run()
        if result.ok:
            logger.info("Successfully completed scheduled exchange rate update for %s", result.date)
        else:
            logger.error("Scheduled update failed: %s", result.error)
        logger.info(
            "Update runs so far: %d succeeded, %d failed (last success %s)",
            self.pipeline.success_count,
            self.pipeline.failure_count,
            self.pipeline.last_success_at.isoformat() if self.pipeline.last_success_at else "never",
        )

    def start(self, run_immediately: bool = True) -> None:
        """
        Start the recurring schedule.

        Args:
            run_immediately: Run one update synchronously before scheduling
        """
        if self.running:
            return
        if run_immediately:
            logger.info("Attempting initial fetch of exchange rates...")
            result = self.pipeline.run()
            if result.ok:
                logger.info("Initial exchange rates loaded successfully")
            else:
                logger.warning("Initial fetch failed (will retry on schedule): %s", result.error)
        self._scheduler.start()
        logger.info(
            "Rate update scheduler started with cron: %s (next run %s)",
            self.cron_expression, self.next_run_time(),
        )

    def shutdown(self, wait: bool = True) -> None:
        """Cancel pending runs; with wait=True an in-flight run finishes first."""
        if not self.running:
            return
        logger.info("Shutting down rate update scheduler")
        self._scheduler.shutdown(wait=wait)
