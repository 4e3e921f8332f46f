# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client for the remote token validation authority.

The authority is reached over HTTP. It receives ``{"token": "<token>"}``
and answers with an envelope::

    {"statusCode": 200, "body": {"tenant_id": "...", "user_id": "..."}}
    {"statusCode": 403, "body": "{\"error\": \"Token expired\"}"}

``body`` may be an object or a JSON-encoded string. Authorities that
answer with a bare JSON document instead of an envelope are also
accepted; the HTTP status then stands in for ``statusCode``.
"""

import json
import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from academic_progress.core.config.settings import TokenValidatorSettings
from academic_progress.models.auth import IdentityClaim

logger = logging.getLogger(__name__)

INVALID_TOKEN_REASON = "Invalid or expired token."


class TokenValidationError(Exception):
    """Raised when a token cannot be turned into an identity claim.

    Attributes:
        reason: Caller-facing reason, as reported by the authority when
            available.
        detail: Internal context for logs.
    """

    def __init__(self, reason: str = INVALID_TOKEN_REASON, detail: str | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.detail = detail


class TokenValidator(Protocol):
    """Capability that verifies a bearer token."""

    async def validate(self, token: str) -> IdentityClaim:
        """Validate a token and return the identity it carries.

        Raises:
            TokenValidationError: If the token is rejected or the check fails.
        """
        ...


def _decode_body(body: Any) -> Any:
    """Decode a body that may arrive as a JSON string."""
    if isinstance(body, (str, bytes)):
        try:
            return json.loads(body)
        except ValueError as e:
            raise TokenValidationError(detail=f"Undecodable validator body: {e}") from e
    return body


def _unwrap_envelope(http_status: int, document: Any) -> tuple[int, Any]:
    """Return ``(statusCode, body)`` from the authority's response document."""
    if isinstance(document, dict) and "statusCode" in document:
        return document["statusCode"], document.get("body")
    return http_status, document


class HttpTokenValidator:
    """Token validator backed by the remote authority over HTTP.

    The underlying httpx.AsyncClient is long-lived and shared by every
    request; each validate() call makes exactly one outbound request and
    nothing is cached.

    Example:
        >>> validator = HttpTokenValidator.from_settings(settings.token_validator)
        >>> claim = await validator.validate("eyJhbGciOi...")
        >>> claim.tenant_id
        't1'
    """

    def __init__(self, client: httpx.AsyncClient, url: str) -> None:
        """Initialize the validator.

        Args:
            client: Shared HTTP client.
            url: Validation endpoint URL.
        """
        self._client = client
        self._url = url

    @classmethod
    def from_settings(cls, settings: TokenValidatorSettings) -> "HttpTokenValidator":
        """Create a validator with its own HTTP client."""
        client = httpx.AsyncClient(
            timeout=settings.timeout,
            headers=settings.headers,
        )
        return cls(client=client, url=settings.url)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def validate(self, token: str) -> IdentityClaim:
        """Validate a token against the remote authority.

        Args:
            token: Bearer token extracted from the request.

        Returns:
            Identity claim with tenant_id and user_id exactly as reported.

        Raises:
            TokenValidationError: If the authority rejects the token, is
                unreachable, times out, or answers with an unexpected shape.
        """
        try:
            response = await self._client.post(self._url, json={"token": token})
            document = response.json()
        except httpx.HTTPError as e:
            raise TokenValidationError(detail=f"Validator request failed: {e!r}") from e
        except ValueError as e:
            raise TokenValidationError(detail=f"Validator returned non-JSON response: {e}") from e

        status_code, body = _unwrap_envelope(response.status_code, document)
        body = _decode_body(body)

        if status_code != 200:
            reason = body.get("error") if isinstance(body, dict) else None
            raise TokenValidationError(
                reason=reason or INVALID_TOKEN_REASON,
                detail=f"Validator answered with status {status_code}",
            )

        try:
            return IdentityClaim.model_validate(body)
        except ValidationError as e:
            raise TokenValidationError(detail=f"Malformed identity claim: {e}") from e
