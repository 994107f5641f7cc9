# price_relay/api/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from price_relay.services.errors import (
    EmptyResult,
    InvalidArgument,
    NotFound,
    PriceRelayError,
    UpstreamError,
    UpstreamUnreachable,
)

logger = logging.getLogger("price_relay.api")


_STATUS_BY_ERROR: dict[type[PriceRelayError], int] = {
    InvalidArgument: 400,
    NotFound: 404,
    EmptyResult: 404,
    UpstreamUnreachable: 502,
}


def status_for(exc: Exception) -> int:
    if isinstance(exc, UpstreamError):
        return exc.status_code
    if isinstance(exc, UpstreamUnreachable) and exc.timed_out:
        return 504
    for err_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(exc, err_type):
            return status_code
    return 500


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _relay_error_handler(request: Request, exc: PriceRelayError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, status_code, exc.__class__.__name__)
    return _error_response(str(exc), status_code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:]) or "request"
    return _error_response(f"Invalid {field}: {first.get('msg', 'bad value')}", 400)


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return _error_response(f"Internal error: {exc}", 500)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PriceRelayError, _relay_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
