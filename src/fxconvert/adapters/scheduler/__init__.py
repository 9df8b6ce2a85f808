# src/fxconvert/adapters/scheduler/__init__.py
"""
Scheduler Adapter - Background Jobs

This package contains the cron-driven rate update job.
"""

from fxconvert.adapters.scheduler.jobs import RateScheduler, build_trigger

__all__ = [
    "RateScheduler",
    "build_trigger",
]
