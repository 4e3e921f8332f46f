# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response models."""

from academic_progress.models.auth import IdentityClaim
from academic_progress.models.progress import (
    REQUIRED_FIELDS,
    NO_COURSES_AT_LEVEL,
    AcademicProgressResponse,
    CourseSummary,
    ErrorResponse,
    ProgressCreatedResponse,
    ProgressRecordCreate,
)

__all__ = [
    "IdentityClaim",
    "REQUIRED_FIELDS",
    "NO_COURSES_AT_LEVEL",
    "AcademicProgressResponse",
    "CourseSummary",
    "ErrorResponse",
    "ProgressCreatedResponse",
    "ProgressRecordCreate",
]
