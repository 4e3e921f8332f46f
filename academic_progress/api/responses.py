# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Response framing shared by every endpoint.

Maps pipeline outcomes to a status code and a JSON body:
- success: the endpoint's payload
- failure: ``{"error": "<message>"}``
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from academic_progress.core.errors import InternalServiceError, ProgressServiceError
from academic_progress.models.progress import ErrorResponse

logger = logging.getLogger(__name__)


def frame_success(status_code: int, body: BaseModel) -> JSONResponse:
    """Frame a successful outcome."""
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def frame_error(error: ProgressServiceError) -> JSONResponse:
    """Frame a failed outcome.

    Only ``error.message`` reaches the caller; ``error.detail`` never does.
    """
    headers = None
    if error.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
        headers=headers,
    )


async def progress_error_handler(request: Request, exc: ProgressServiceError) -> JSONResponse:
    """Exception handler that frames ProgressServiceError raised by routes or dependencies."""
    logger.info(
        "%s %s failed with %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc.message,
    )
    return frame_error(exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler framing anything that escaped as InternalError."""
    logger.error(
        "%s %s failed with unhandled %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc_info=exc,
    )
    return frame_error(InternalServiceError(detail=str(exc)))
