"""
Error types surfaced to API callers and the handlers that render them.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


class EventsApiError(Exception):
    """Base class for errors returned as {success: false, error: ...}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EventsApiError):
    """A required request field is missing."""

    status_code = 400


class AuthorizationError(EventsApiError):
    """The destination address is not on the allow-list."""

    status_code = 403


class StoreError(EventsApiError):
    """A document store operation failed."""


class ProviderError(EventsApiError):
    """The email provider rejected or failed to dispatch a message."""


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


async def events_api_error_handler(request: Request, exc: EventsApiError):
    marker = type(exc).__name__
    if exc.status_code >= 500:
        logger.error("[%s] %s %s: %s", marker, request.method, request.url.path, exc.message)
    else:
        logger.warning("[%s] %s %s: %s", marker, request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    logger.warning(
        "[RequestValidationError] %s %s: %s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return _error_response(400, INVALID_BODY_MESSAGE)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "[%s] %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return _error_response(500, str(exc) or type(exc).__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EventsApiError, events_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
