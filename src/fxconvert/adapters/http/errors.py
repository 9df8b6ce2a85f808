# src/fxconvert/adapters/http/errors.py
"""
HTTP Error Translation

The single place where domain errors become HTTP status codes. Client
errors carry their detail back to the caller; upstream, storage and
calculation failures are logged in full and answered with a generic
message so backend details never leak.

| Error                    | Status |
|--------------------------|--------|
| CurrencyNotFoundError    | 404    |
| NoRatesAvailableError    | 503    |
| InputValidationError     | 400    |
| request validation       | 400    |
| everything else          | 500    |
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from fxconvert.domain.errors import (
    CalculationError,
    CurrencyNotFoundError,
    DomainError,
    FetchError,
    InputValidationError,
    NoRatesAvailableError,
    ParseError,
    StoreError,
)

logger = logging.getLogger(__name__)

# Errors whose message is safe and useful to show the caller
CLIENT_ERRORS = {
    CurrencyNotFoundError: status.HTTP_404_NOT_FOUND,
    NoRatesAvailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    InputValidationError: status.HTTP_400_BAD_REQUEST,
}

# Generic messages for server-side failures
SERVER_ERROR_MESSAGES = {
    FetchError: "Failed to fetch exchange rates",
    ParseError: "Failed to parse exchange rate data",
    StoreError: "Database connection error",
    CalculationError: "Failed to calculate conversion",
}

GENERIC_ERROR_MESSAGE = "Internal server error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def status_for(exc: DomainError) -> int:
    for error_type, status_code in CLIENT_ERRORS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code != status.HTTP_500_INTERNAL_SERVER_ERROR:
        if isinstance(exc, InputValidationError):
            return _error(status_code, f"Invalid parameter: {exc.detail}")
        return _error(status_code, exc.detail)

    logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    message = GENERIC_ERROR_MESSAGE
    for error_type, text in SERVER_ERROR_MESSAGES.items():
        if isinstance(exc, error_type):
            message = text
            break
    return _error(status_code, message)


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "query")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid parameter: " + "; ".join(problems))


def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(exc.status_code, f"No route for {request.method} {request.url.path}")
    return _error(exc.status_code, str(exc.detail))


def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled exception")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
