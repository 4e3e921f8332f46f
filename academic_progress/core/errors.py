# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Error taxonomy shared by the submit and retrieve pipelines.

Each error kind carries the HTTP status it is framed with and a message
that is safe to show to the caller. Internal details travel in
``detail`` and are only ever logged.
"""

from fastapi import status


class ProgressServiceError(Exception):
    """Base exception for academic progress request failures.

    Attributes:
        status_code: HTTP status the error is reported with.
        message: User-facing error description.
        detail: Internal context for logs, never sent to the caller.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: User-facing message, defaults to the kind's message.
            detail: Internal context for logs.
        """
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class UnauthenticatedError(ProgressServiceError):
    """Credential missing, invalid or expired, or the validator failed."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authorization token not provided."


class InvalidInputError(ProgressServiceError):
    """Write payload is missing a required field or has a bad value."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid academic progress payload."


class ForbiddenError(ProgressServiceError):
    """Payload tenant differs from the authenticated tenant."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not allowed to record progress for this tenant."


class ConflictError(ProgressServiceError):
    """A record already exists under the same composite key."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Academic progress record already exists."


class StorageUnavailableError(ProgressServiceError):
    """The progress store failed for a reason other than the insert condition."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Progress store unavailable."


class InternalServiceError(ProgressServiceError):
    """Any unanticipated failure. Only the generic message is exposed."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail=detail)
