# src/fxconvert/adapters/http/api.py
"""
HTTP API - FastAPI Application Factory and Routes

Routes (all GET, JSON):
- /               service banner with endpoint list
- /health         cache backend liveness and last update date (never errors)
- /api/latest     latest rates, optionally rebased: ?base=USD
- /api/convert    ?from=USD&to=JPY&amount=100

The rate store is injected into create_app() and kept on app.state; routes
reach it through FastAPI dependencies. Route functions are plain `def` so
the blocking Redis calls run on the thread pool instead of the event loop.

If a scheduler is given, the app lifespan starts it (running one eager
update) and shuts it down after the server stops accepting requests.

Files that USE this module:
- fxconvert.app (creates the application)
- tests.test_api (endpoint tests)

Files that this module USES:
- fxconvert.application (RatesService, HealthChecker)
- fxconvert.adapters.http.errors (error handlers)
- fxconvert.adapters.http.schemas (response models)
- fxconvert.adapters.scheduler.jobs (RateScheduler lifecycle)
- fxconvert.shared (validators, request id context)
"""
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.concurrency import run_in_threadpool

from fxconvert import __version__
from fxconvert.adapters.http.errors import register_error_handlers
from fxconvert.adapters.http.schemas import (
    ConvertResponse,
    ErrorResponse,
    HealthResponse,
    LatestRatesResponse,
)
from fxconvert.adapters.persistence.redis_store import RateStore
from fxconvert.adapters.scheduler.jobs import RateScheduler
from fxconvert.application.health import HealthChecker
from fxconvert.application.rates_service import RatesService
from fxconvert.domain.errors import InputValidationError
from fxconvert.shared.logging_conf import request_id_ctx
from fxconvert.shared.validators import parse_amount, validate_currency_code

logger = logging.getLogger(__name__)

SERVICE_NAME = "Currency Converter API"

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid parameter"},
    404: {"model": ErrorResponse, "description": "Currency not found"},
    500: {"model": ErrorResponse, "description": "Calculation or backend failure"},
    503: {"model": ErrorResponse, "description": "No exchange rates cached yet"},
}


def get_store(request: Request) -> RateStore:
    return request.app.state.store


def get_rates_service(store: RateStore = Depends(get_store)) -> RatesService:
    return RatesService(store)


def _require_code(name: str, value: str) -> str:
    if not validate_currency_code(value):
        raise InputValidationError(f"{name}: must be a 3-letter currency code, got {value!r}")
    return value.strip().upper()


@router.get("/")
def root():
    return {
        "status": "success",
        "service": SERVICE_NAME,
        "version": __version__,
        "endpoints": {
            "health": "GET /health",
            "latest_rates": "GET /api/latest?base=<CURRENCY>",
            "convert": "GET /api/convert?from=<FROM>&to=<TO>&amount=<AMOUNT>",
        },
    }


@router.get("/health", response_model=HealthResponse)
def health(store: RateStore = Depends(get_store)) -> HealthResponse:
    report = HealthChecker(store).report()
    return HealthResponse(**report.as_dict())


@router.get("/api/latest", response_model=LatestRatesResponse, responses=_ERROR_RESPONSES)
def latest_rates(
    base: Optional[str] = Query(None, description="Base currency, e.g. USD"),
    service: RatesService = Depends(get_rates_service),
) -> LatestRatesResponse:
    if base is not None:
        base = _require_code("base", base)
    return LatestRatesResponse.from_rate_set(service.latest(base))


@router.get("/api/convert", response_model=ConvertResponse, responses=_ERROR_RESPONSES)
def convert_currency(
    from_currency: str = Query(..., alias="from", description="Source currency"),
    to_currency: str = Query(..., alias="to", description="Target currency"),
    amount: str = Query(..., description="Non-negative decimal amount"),
    service: RatesService = Depends(get_rates_service),
) -> ConvertResponse:
    from_currency = _require_code("from", from_currency)
    to_currency = _require_code("to", to_currency)
    value = parse_amount(amount)
    return ConvertResponse.from_conversion(service.convert(from_currency, to_currency, value))


async def request_context_middleware(request: Request, call_next):
    rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    token = request_id_ctx.set(rid)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        response.headers["X-Request-ID"] = rid
        return response
    finally:
        request_id_ctx.reset(token)


def create_app(
    store: RateStore,
    scheduler: Optional[RateScheduler] = None,
    cors_origins: Sequence[str] = ("*",),
) -> FastAPI:
    """
    Application factory.

    Args:
        store: Shared rate store handle
        scheduler: Optional update scheduler tied to the app lifespan
        cors_origins: Allowed CORS origins
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler is not None:
            await run_in_threadpool(scheduler.start)
        try:
            yield
        finally:
            if scheduler is not None:
                await run_in_threadpool(scheduler.shutdown)
            logger.info("Server shutdown complete")

    app = FastAPI(title=SERVICE_NAME, version=__version__, lifespan=lifespan)
    app.state.store = store
    app.state.scheduler = scheduler

    app.middleware("http")(request_context_middleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)
    return app
