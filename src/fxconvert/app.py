# src/fxconvert/app.py
"""
Application Entry Point - Service Wiring and Startup

This module serves as the composition root for the fxconvert service.
It wires all dependencies and starts the HTTP server.

Files that USE this module:
- fxconvert console script (pyproject entry point)
- python -m fxconvert.app

Files that this module USES:
- fxconvert.shared.logging_conf (setup_logging for logging configuration)
- fxconvert.config (settings for configuration management)
- fxconvert.adapters.persistence.redis_store (RedisRateStore)
- fxconvert.adapters.providers.ecb (EcbRateProvider)
- fxconvert.application.updater (RateUpdatePipeline)
- fxconvert.adapters.scheduler.jobs (RateScheduler)
- fxconvert.adapters.http.api (create_app)
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI

from fxconvert import __version__
from fxconvert.adapters.http.api import create_app
from fxconvert.adapters.persistence.redis_store import RedisRateStore
from fxconvert.adapters.providers.ecb import EcbRateProvider
from fxconvert.adapters.scheduler.jobs import RateScheduler
from fxconvert.application.updater import RateUpdatePipeline
from fxconvert.config import Settings
from fxconvert.shared.logging_conf import setup_logging


def build_application(config: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI app with its store, feed provider, pipeline and scheduler.

    Args:
        config: Settings to use (defaults to the global settings instance)
    """
    if config is None:
        from fxconvert.config import settings as config

    store = RedisRateStore.from_url(config.redis_url, timeout=config.redis_timeout_seconds)
    provider = EcbRateProvider(url=config.ecb_url, timeout=config.http_timeout_seconds)
    pipeline = RateUpdatePipeline(provider=provider, store=store)
    scheduler = RateScheduler(
        pipeline,
        cron_expression=config.update_cron,
        timezone=config.update_timezone,
    )
    return create_app(store, scheduler=scheduler, cors_origins=config.cors_origins)


def main() -> None:
    """
    Initialize and start the service.

    This function:
    1. Sets up logging from settings
    2. Wires store, provider, pipeline and scheduler into the FastAPI app
    3. Runs uvicorn until SIGINT/SIGTERM, then drains requests and stops the scheduler
    """
    from fxconvert.config import settings

    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)
    logger.info("Starting fxconvert %s (pid %d)", __version__, os.getpid())
    logger.info("Loaded configuration: feed=%s, cron=%s %s",
                settings.ecb_url, settings.update_cron, settings.update_timezone)

    app = build_application(settings)
    logger.info("Server listening on %s", settings.server_address)
    try:
        uvicorn.run(
            app,
            host=settings.server_host,
            port=settings.server_port,
            log_config=None,  # keep the handlers installed by setup_logging
        )
    finally:
        app.state.store.close()


if __name__ == "__main__":
    main()
