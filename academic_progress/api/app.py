# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the Academic
Progress API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from academic_progress import __version__
from academic_progress.api.dependencies import close_resources, init_resources
from academic_progress.api.middleware.request_context import RequestContextMiddleware
from academic_progress.api.responses import progress_error_handler, unhandled_error_handler
from academic_progress.api.routes import health
from academic_progress.api.v1 import router as v1_router
from academic_progress.core.config import get_settings
from academic_progress.core.errors import ProgressServiceError
from academic_progress.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates the process-scoped resources (database pool, token validator
    HTTP client) at startup and releases them at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting Academic Progress API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    await init_resources(settings)

    yield

    try:
        await close_resources()
        logger.info("Resources released")
    except Exception as e:
        logger.warning("Error releasing resources: %s", str(e))

    logger.info("Shutting down Academic Progress API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Academic Progress API",
        description="Records and retrieves student academic progress by curriculum level",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Avoid 307 redirects that lose Authorization headers
        redirect_slashes=False,
    )

    app.add_exception_handler(ProgressServiceError, progress_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Middleware (last added is first executed)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app
