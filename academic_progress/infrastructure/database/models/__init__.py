# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the progress store."""

from academic_progress.infrastructure.database.models.base import Base, TimestampMixin
from academic_progress.infrastructure.database.models.progress import (
    KEY_SEPARATOR,
    AcademicProgress,
    build_partition_key,
    build_sort_key,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "KEY_SEPARATOR",
    "AcademicProgress",
    "build_partition_key",
    "build_sort_key",
]
