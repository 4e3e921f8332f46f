# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides health, liveness and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from academic_progress import __version__
from academic_progress.core.config import get_settings
from academic_progress.infrastructure.database.connection import check_database_connection

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(description="Overall health status")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")
    checked_at: datetime = Field(description="When health was checked")
    database: str = Field(description="Database status")


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    ready: bool = Field(description="Whether the service is ready")
    checks: dict[str, bool] = Field(description="Individual check results")


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report overall service health."""
    database_ok = await check_database_connection()
    if not database_ok:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if database_ok else "degraded",
        version=__version__,
        environment=get_settings().environment,
        uptime_seconds=int(time.time() - _server_start_time),
        checked_at=datetime.now(timezone.utc),
        database="healthy" if database_ok else "unhealthy",
    )


@router.get("/health/live")
async def live() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "alive"}


@router.get("/health/ready", response_model=ReadinessResponse)
async def ready() -> JSONResponse:
    """Readiness probe. 503 while the database is unreachable."""
    database_ok = await check_database_connection()
    body = ReadinessResponse(ready=database_ok, checks={"database": database_ok})
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
