# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Keyed progress store over the academic_progress table.

Two primitives are offered:
- put_if_absent: atomic insert that fails when the composite key exists
- query_partition: every row under one partition key

Uniqueness relies on the table's composite primary key; there is no
read-before-write.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from academic_progress.infrastructure.database.connection import DatabaseError
from academic_progress.infrastructure.database.models import AcademicProgress

logger = logging.getLogger(__name__)


class RecordExistsError(DatabaseError):
    """Raised when a conditional insert hits an existing composite key."""

    pass


class ProgressStore:
    """Progress store bound to the process-wide sessionmaker.

    Attributes:
        _sessionmaker: Shared async sessionmaker; one session per call.
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def put_if_absent(self, record: AcademicProgress) -> None:
        """Insert a record only if its composite key is free.

        Args:
            record: Fully populated row, keys included.

        Raises:
            RecordExistsError: If a row with the same keys already exists.
            DatabaseError: If the store fails for any other reason.
        """
        try:
            async with self._sessionmaker() as session:
                session.add(record)
                await session.commit()
        except IntegrityError as e:
            raise RecordExistsError(
                f"Record {record.partition_key}/{record.sort_key} already exists", e
            ) from e
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseError("Failed to insert academic progress", e) from e

    async def query_partition(self, partition_key: str) -> list[AcademicProgress]:
        """Fetch every record under a partition key, ordered by sort key.

        Raises:
            DatabaseError: If the store fails.
        """
        query = (
            select(AcademicProgress)
            .where(AcademicProgress.partition_key == partition_key)
            .order_by(AcademicProgress.sort_key)
        )
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseError("Failed to query academic progress", e) from e
