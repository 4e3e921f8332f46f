# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across unit and integration tests:
- Identity claims and progress payloads
- A deterministic token validator double
- An in-memory progress store honoring the composite-key uniqueness
"""

from collections.abc import Callable
from typing import Any

import pytest

from academic_progress.domains.auth.validator import TokenValidationError
from academic_progress.domains.progress.store import RecordExistsError
from academic_progress.infrastructure.database.models import AcademicProgress
from academic_progress.models.auth import IdentityClaim


# =============================================================================
# Test Doubles
# =============================================================================


class FakeTokenValidator:
    """Token validator returning fixed claims per token.

    Unknown tokens are rejected with the configured reason.
    """

    def __init__(self, claims: dict[str, IdentityClaim], reason: str = "Token expired") -> None:
        self.claims = claims
        self.reason = reason
        self.calls: list[str] = []

    async def validate(self, token: str) -> IdentityClaim:
        self.calls.append(token)
        if token not in self.claims:
            raise TokenValidationError(reason=self.reason)
        return self.claims[token]


class InMemoryProgressStore:
    """Progress store keeping rows in a dict keyed by the composite key."""

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], AcademicProgress] = {}

    async def put_if_absent(self, record: AcademicProgress) -> None:
        key = (record.partition_key, record.sort_key)
        if key in self.rows:
            raise RecordExistsError(f"Record {key} already exists")
        self.rows[key] = record

    async def query_partition(self, partition_key: str) -> list[AcademicProgress]:
        return [
            row
            for (pk, _), row in sorted(self.rows.items())
            if pk == partition_key
        ]


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def identity() -> IdentityClaim:
    """Provide the identity the sample token resolves to."""
    return IdentityClaim(tenant_id="t1", user_id="u1")


@pytest.fixture
def progress_payload() -> dict[str, Any]:
    """Provide a valid progress payload for the sample identity."""
    return {
        "tenant_id": "t1",
        "user_id": "u1",
        "level": 3,
        "course_id": "C101",
        "course_name": "Algebra",
        "credits": 4,
        "grade": 85,
        "status": "completed",
        "period": "2024-1",
    }


@pytest.fixture
def token_validator(identity: IdentityClaim) -> FakeTokenValidator:
    """Provide a validator that accepts 'valid-token'."""
    return FakeTokenValidator({"valid-token": identity})


@pytest.fixture
def progress_store() -> InMemoryProgressStore:
    """Provide an empty in-memory progress store."""
    return InMemoryProgressStore()


@pytest.fixture
def make_record() -> Callable[..., AcademicProgress]:
    """Provide a builder of stored rows for tenant t1 / user u1."""

    def _make(level: int, course_id: str, **overrides: Any) -> AcademicProgress:
        values: dict[str, Any] = {
            "partition_key": "t1#u1",
            "sort_key": f"{level}#{course_id}",
            "tenant_id": "t1",
            "user_id": "u1",
            "level": level,
            "course_id": course_id,
            "course_name": f"Course {course_id}",
            "credits": 3.0,
            "grade": 90,
            "status": "completed",
            "period": "2024-1",
        }
        values.update(overrides)
        return AcademicProgress(**values)

    return _make
