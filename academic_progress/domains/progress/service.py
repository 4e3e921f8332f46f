# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic progress service.

This module provides the ProgressService class for:
- Recording one course-progress record (uniqueness-guarded insert)
- Retrieving a student's progress grouped by curriculum level

Both operations take an IdentityClaim that the authentication gate has
already verified.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from academic_progress.core.errors import (
    ConflictError,
    ForbiddenError,
    InternalServiceError,
    InvalidInputError,
    StorageUnavailableError,
)
from academic_progress.domains.progress.store import ProgressStore, RecordExistsError
from academic_progress.infrastructure.database.connection import DatabaseError
from academic_progress.infrastructure.database.models import (
    AcademicProgress,
    build_partition_key,
    build_sort_key,
)
from academic_progress.models.auth import IdentityClaim
from academic_progress.models.progress import (
    MAX_LEVEL,
    MIN_LEVEL,
    NO_COURSES_AT_LEVEL,
    REQUIRED_FIELDS,
    AcademicProgressResponse,
    CourseSummary,
    ProgressRecordCreate,
)

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = f"Missing required fields: {', '.join(REQUIRED_FIELDS)}."


def parse_payload(raw: bytes | str | dict[str, Any]) -> dict[str, Any]:
    """Decode a submitted payload into a dict.

    A JSON document whose value is itself a JSON string is decoded twice.

    Raises:
        InternalServiceError: If the payload cannot be decoded into an object.
    """
    payload: Any = raw
    try:
        if isinstance(payload, (bytes, str)):
            payload = json.loads(payload)
        if isinstance(payload, str):
            payload = json.loads(payload)
    except ValueError as e:
        raise InternalServiceError(detail=f"Undecodable payload: {e}") from e

    if not isinstance(payload, dict):
        raise InternalServiceError(
            detail=f"Payload is a {type(payload).__name__}, expected an object"
        )
    return payload


def _is_missing(field: str, value: Any) -> bool:
    # grade may legitimately be 0 or False
    if field == "grade":
        return value is None
    return not value


def validate_payload(payload: dict[str, Any]) -> ProgressRecordCreate:
    """Check presence and types of every required field.

    Raises:
        InvalidInputError: On a missing field (message lists all required
            fields) or on a value of the wrong type or range.
    """
    missing = [field for field in REQUIRED_FIELDS if _is_missing(field, payload.get(field))]
    if missing:
        raise InvalidInputError(MISSING_FIELDS_MESSAGE, detail=f"missing={missing}")

    try:
        return ProgressRecordCreate.model_validate(payload)
    except ValidationError as e:
        error = e.errors()[0]
        # loc may continue into a union branch; report the payload field only
        field = error["loc"][0]
        raise InvalidInputError(
            f"Invalid value for field '{field}': {error['msg']}.",
            detail=str(e),
        ) from e


def group_by_level(records: list[AcademicProgress]) -> dict[int, list[CourseSummary] | str]:
    """Group records into the fixed level buckets MIN_LEVEL..MAX_LEVEL.

    Records outside the range are dropped. Buckets left empty hold
    NO_COURSES_AT_LEVEL instead of a list.
    """
    grouped: dict[int, list[CourseSummary]] = {
        level: [] for level in range(MIN_LEVEL, MAX_LEVEL + 1)
    }

    for record in records:
        bucket = grouped.get(record.level)
        if bucket is None:
            logger.debug(
                "Dropping record %s/%s with out-of-range level %s",
                record.partition_key,
                record.sort_key,
                record.level,
            )
            continue
        bucket.append(CourseSummary.model_validate(record))

    return {level: courses or NO_COURSES_AT_LEVEL for level, courses in grouped.items()}


class ProgressService:
    """Service for recording and retrieving academic progress.

    Attributes:
        store: Keyed progress store.
    """

    def __init__(self, store: ProgressStore) -> None:
        """Initialize progress service.

        Args:
            store: Store offering conditional insert and partition query.
        """
        self.store = store

    async def record_progress(
        self,
        identity: IdentityClaim,
        payload: dict[str, Any],
    ) -> ProgressRecordCreate:
        """Record one course-progress entry.

        Args:
            identity: Verified identity of the caller.
            payload: Decoded request body.

        Returns:
            The validated record that was stored.

        Raises:
            InvalidInputError: If a required field is missing or invalid.
            ForbiddenError: If the payload tenant is not the caller's tenant.
            ConflictError: If the student already has this course at this level.
            StorageUnavailableError: If the store fails.
        """
        try:
            data = validate_payload(payload)
        except InvalidInputError as e:
            logger.warning(
                "Rejected progress payload from %s/%s: %s",
                identity.tenant_id,
                identity.user_id,
                e.detail,
            )
            raise

        if data.tenant_id != identity.tenant_id:
            logger.warning(
                "Token tenant %s does not match payload tenant %s",
                identity.tenant_id,
                data.tenant_id,
            )
            raise ForbiddenError()

        record = AcademicProgress(
            partition_key=build_partition_key(data.tenant_id, data.user_id),
            sort_key=build_sort_key(data.level, data.course_id),
            tenant_id=data.tenant_id,
            user_id=data.user_id,
            level=data.level,
            course_id=data.course_id,
            course_name=data.course_name,
            credits=data.credits,
            grade=data.grade,
            status=data.status,
            period=data.period,
        )

        try:
            await self.store.put_if_absent(record)
        except RecordExistsError as e:
            logger.info("Duplicate academic progress: %s", e.message)
            raise ConflictError() from e
        except DatabaseError as e:
            logger.error(
                "Error saving academic progress for %s: %s",
                record.partition_key,
                e,
            )
            raise StorageUnavailableError("Error saving academic progress.", detail=str(e)) from e

        logger.info(
            "Recorded academic progress: %s/%s",
            record.partition_key,
            record.sort_key,
        )
        return data

    async def get_grouped_progress(self, identity: IdentityClaim) -> AcademicProgressResponse:
        """Retrieve the caller's progress grouped by level.

        Args:
            identity: Verified identity of the caller.

        Returns:
            Grouped view with all ten levels present.

        Raises:
            StorageUnavailableError: If the store fails.
        """
        partition_key = build_partition_key(identity.tenant_id, identity.user_id)

        try:
            records = await self.store.query_partition(partition_key)
        except DatabaseError as e:
            logger.error("Error querying academic progress for %s: %s", partition_key, e)
            raise StorageUnavailableError(
                "Error retrieving academic progress.", detail=str(e)
            ) from e

        logger.debug("Fetched %d progress records for %s", len(records), partition_key)

        return AcademicProgressResponse(
            tenant_id=identity.tenant_id,
            user_id=identity.user_id,
            academic_progress=group_by_level(records),
        )
