# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic progress API endpoints.

This module provides:
- POST / - Record one course-progress entry
- GET / - Get the caller's progress grouped by level

Both endpoints require a bearer token; the identity it resolves to is
the only identity trusted for authorization.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from academic_progress.api.dependencies import get_progress_service, require_identity
from academic_progress.api.responses import frame_success
from academic_progress.core.errors import InternalServiceError, ProgressServiceError
from academic_progress.domains.progress.service import ProgressService, parse_payload
from academic_progress.models.auth import IdentityClaim
from academic_progress.models.progress import (
    AcademicProgressResponse,
    ErrorResponse,
    ProgressCreatedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=ProgressCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record academic progress",
    description="Record one course taken by a student. The payload tenant must match the token tenant.",
    responses={
        **_ERROR_RESPONSES,
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def create_progress(
    request: Request,
    identity: Annotated[IdentityClaim, Depends(require_identity)],
    service: Annotated[ProgressService, Depends(get_progress_service)],
) -> JSONResponse:
    """Record one course-progress entry.

    Args:
        request: HTTP request carrying the JSON payload.
        identity: Verified caller identity.
        service: Progress service.

    Returns:
        201 confirmation.
    """
    try:
        payload = parse_payload(await request.body())
        await service.record_progress(identity, payload)
    except ProgressServiceError:
        raise
    except Exception as e:
        logger.exception(
            "Unexpected error recording progress for %s/%s",
            identity.tenant_id,
            identity.user_id,
        )
        raise InternalServiceError(detail=repr(e)) from e

    return frame_success(status.HTTP_201_CREATED, ProgressCreatedResponse())


@router.get(
    "",
    response_model=AcademicProgressResponse,
    summary="Get academic progress",
    description="Get every course of the authenticated student grouped by levels 1 to 10.",
    responses=_ERROR_RESPONSES,
)
async def get_progress(
    identity: Annotated[IdentityClaim, Depends(require_identity)],
    service: Annotated[ProgressService, Depends(get_progress_service)],
) -> JSONResponse:
    """Get the caller's progress grouped by level.

    Args:
        identity: Verified caller identity.
        service: Progress service.

    Returns:
        Grouped progress view.
    """
    try:
        result = await service.get_grouped_progress(identity)
    except ProgressServiceError:
        raise
    except Exception as e:
        logger.exception(
            "Unexpected error retrieving progress for %s/%s",
            identity.tenant_id,
            identity.user_id,
        )
        raise InternalServiceError(detail=repr(e)) from e

    return frame_success(status.HTTP_200_OK, result)
