# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request context middleware.

Binds a request id to the structlog context for the duration of each
request and echoes it back in the response.

Example:
    GET /api/v1/academic-progress
    X-Request-ID: 7d3f...        # optional, generated when absent
"""

import logging
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from academic_progress.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware binding per-request logging context."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Response],
    ) -> Response:
        """Bind context, process the request, then clear the context.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler.

        Returns:
            HTTP response carrying the request id header.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())

        clear_context()
        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            response = await call_next(request)
        finally:
            clear_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
