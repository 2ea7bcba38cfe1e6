# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exception handlers producing the uniform error envelope.

Every error response body has the shape {"error": message, "code": CODE}
with an optional "details" list for request validation failures.
Repositories let errors propagate; this module is the only place that
classifies them. Persistence and unexpected failures are logged with full
detail and answered with a generic message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domains.class_.exceptions import ClassServiceError
from src.infrastructure.database.connection import PersistenceError
from src.models.class_ import ErrorResponse

logger = logging.getLogger(__name__)

_HTTP_STATUS_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
    status.HTTP_503_SERVICE_UNAVAILABLE: "SERVICE_UNAVAILABLE",
}


def error_response(
    status_code: int,
    message: str,
    code: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(error=message, code=code, details=details)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
    )


async def class_error_handler(request: Request, exc: ClassServiceError) -> JSONResponse:
    """Translate domain errors using their own code and status."""
    logger.info(
        "%s %s rejected: %s (%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.code,
    )
    return error_response(exc.status_code, exc.message, exc.code)


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Log database failures server-side and hide their detail."""
    logger.exception(
        "Database error during %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "A database error occurred",
        "DATABASE_ERROR",
    )


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request payloads with per-field details."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        "VALIDATION_ERROR",
        details=details,
    )


async def http_error_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap framework HTTP errors in the envelope."""
    code = _HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return error_response(exc.status_code, str(exc.detail), code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for anything not classified above."""
    logger.exception(
        "Unhandled error during %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        "INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install all envelope handlers on an application."""
    app.add_exception_handler(ClassServiceError, class_error_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
