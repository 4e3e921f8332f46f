# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

Dependencies are used to:
- Authenticate the caller through the AuthGate
- Get the progress store and service

The database engine and the validator's HTTP client are process-scoped:
init_resources() creates them once at startup and close_resources()
releases them at shutdown.

Example:
    @router.get("")
    async def get_progress(
        identity: IdentityClaim = Depends(require_identity),
        service: ProgressService = Depends(get_progress_service),
    ):
        ...
"""

import logging
from typing import Annotated

from fastapi import Depends, Header

from academic_progress.core.config.settings import Settings
from academic_progress.core.errors import InternalServiceError, StorageUnavailableError
from academic_progress.domains.auth.service import AuthGate
from academic_progress.domains.auth.validator import HttpTokenValidator, TokenValidator
from academic_progress.domains.progress.service import ProgressService
from academic_progress.domains.progress.store import ProgressStore
from academic_progress.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    get_sessionmaker,
    init_database,
)
from academic_progress.models.auth import IdentityClaim

logger = logging.getLogger(__name__)

# Token validator singleton
_token_validator: HttpTokenValidator | None = None


async def init_resources(settings: Settings) -> None:
    """Create the token validator client and the database pool."""
    global _token_validator

    _token_validator = HttpTokenValidator.from_settings(settings.token_validator)

    try:
        await init_database(settings)
        logger.info("Progress database initialized")
    except DatabaseError as e:
        # Requests will answer StorageUnavailable until the database is back
        logger.warning("Failed to initialize progress database: %s", e)


async def close_resources() -> None:
    """Release the token validator client and the database pool."""
    global _token_validator

    if _token_validator is not None:
        await _token_validator.aclose()
        _token_validator = None

    await close_database()


def get_token_validator() -> TokenValidator:
    """Get the process-wide token validator.

    Raises:
        InternalServiceError: If resources were not initialized.
    """
    if _token_validator is None:
        raise InternalServiceError(detail="Token validator not initialized")
    return _token_validator


def get_auth_gate(
    validator: Annotated[TokenValidator, Depends(get_token_validator)],
) -> AuthGate:
    """Get the authentication gate."""
    return AuthGate(validator)


async def require_identity(
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
    authorization: Annotated[str | None, Header()] = None,
) -> IdentityClaim:
    """Require a verified identity.

    Raises:
        UnauthenticatedError: If the bearer token is missing or rejected.
    """
    return await gate.authenticate(authorization)


def get_progress_store() -> ProgressStore:
    """Get a progress store bound to the shared sessionmaker.

    Raises:
        StorageUnavailableError: If the database is not initialized.
    """
    try:
        return ProgressStore(get_sessionmaker())
    except DatabaseError as e:
        logger.error("Progress store requested before initialization: %s", e)
        raise StorageUnavailableError(detail=str(e)) from e


def get_progress_service(
    store: Annotated[ProgressStore, Depends(get_progress_store)],
) -> ProgressService:
    """Get the progress service."""
    return ProgressService(store=store)
