# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic progress table.

Rows are addressed by a two-part composite key:
- partition_key: ``<tenant_id>#<user_id>``
- sort_key: ``<level>#<course_id>``

The primary key over both parts is what makes inserts conditional.
"""

from typing import Any

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from academic_progress.infrastructure.database.models.base import Base, TimestampMixin

KEY_SEPARATOR = "#"


def build_partition_key(tenant_id: str, user_id: str) -> str:
    """Build the per-student partition key."""
    return f"{tenant_id}{KEY_SEPARATOR}{user_id}"


def build_sort_key(level: int, course_id: str) -> str:
    """Build the per-course sort key inside a student partition."""
    return f"{level}{KEY_SEPARATOR}{course_id}"


class AcademicProgress(TimestampMixin, Base):
    """One course taken by one student within a tenant."""

    __tablename__ = "academic_progress"

    partition_key: Mapped[str] = mapped_column(String(255), primary_key=True)
    sort_key: Mapped[str] = mapped_column(String(255), primary_key=True)

    tenant_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    course_id: Mapped[str] = mapped_column(String(100), nullable=False)
    course_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Kept as submitted: credits integer or fractional, grade numeric or categorical
    credits: Mapped[int | float] = mapped_column(JSON, nullable=False)
    grade: Mapped[Any] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    period: Mapped[str] = mapped_column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<AcademicProgress({self.partition_key!r}, {self.sort_key!r})>"
