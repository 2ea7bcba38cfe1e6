# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request context middleware.

Binds a request id and the caller id into the structlog context for the
lifetime of a request, so every log line emitted while serving it can be
correlated.

The caller id is forwarded by the authenticating gateway in the
X-User-ID header. Permissions are checked before requests reach this
service.

Example:
    GET /api/v1/classes
    X-Request-ID: 3f0c...
    X-User-ID: 42
"""

import logging
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
USER_ID_HEADER = "X-User-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware populating request.state and the logging context.

    Sets request.state.request_id and request.state.user_id, binds both
    to structlog contextvars and echoes the request id in the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        user_id = getattr(request.state, "user_id", None) or request.headers.get(USER_ID_HEADER)

        request.state.request_id = request_id
        request.state.user_id = user_id

        clear_context()
        bind_context(request_id=request_id, user_id=user_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
