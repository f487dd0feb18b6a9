"""
Exception handlers.

Every error response is `{"message": ...}`. ServiceError kinds map to status
codes through STATUS_BY_KIND only.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lorekeep.core.errors import ErrorKind, ServiceError
from lorekeep.integrations.sentry import capture_exception

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn exceptions into JSON error bodies."""

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        log_fn = logger.error if exc.status_code >= 500 else logger.info
        log_fn(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind.value}: {exc.message}")
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
        logger.info(f"{request.method} {request.url.path} -> 400 invalid fields: {fields}")
        return _error_response(400, ServiceError(ErrorKind.BAD_REQUEST).message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Unknown path and known path with the wrong method read the same
        if exc.status_code in (404, 405):
            return _error_response(404, "Endpoint Not Found")
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        capture_exception(exc, path=request.url.path, method=request.method)
        return _error_response(500, f"Internal Server Error ({exc})")
