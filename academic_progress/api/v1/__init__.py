# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    progress: Academic progress endpoints (record, grouped retrieval).
"""

from fastapi import APIRouter

from academic_progress.api.v1 import progress

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(progress.router, prefix="/academic-progress", tags=["Academic Progress"])

__all__ = ["router"]
