# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the authentication gate."""

from unittest.mock import AsyncMock

import pytest

from academic_progress.core.errors import UnauthenticatedError
from academic_progress.domains.auth.service import AuthGate, extract_bearer_token


class TestExtractBearerToken:
    """Tests for Authorization header parsing."""

    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc", "abc"),
            (None, None),
            ("", None),
            ("Bearer", None),
            ("Basic dXNlcjpwYXNz", None),
            ("Bearer a b", None),
        ],
    )
    def test_extract(self, header: str | None, expected: str | None) -> None:
        """Test only well-formed bearer headers yield a token."""
        assert extract_bearer_token(header) == expected


class TestAuthGate:
    """Tests for AuthGate.authenticate."""

    @pytest.mark.asyncio
    async def test_valid_token_returns_claim(self, token_validator, identity) -> None:
        """Test a valid token resolves to its identity with one validator call."""
        gate = AuthGate(token_validator)

        claim = await gate.authenticate("Bearer valid-token")

        assert claim == identity
        assert token_validator.calls == ["valid-token"]

    @pytest.mark.asyncio
    async def test_missing_header_makes_no_remote_call(self, token_validator) -> None:
        """Test an absent header fails before contacting the validator."""
        gate = AuthGate(token_validator)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await gate.authenticate(None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Authorization token not provided."
        assert token_validator.calls == []

    @pytest.mark.asyncio
    async def test_rejected_token_carries_reason(self, token_validator) -> None:
        """Test a rejected token reports the validator's reason."""
        gate = AuthGate(token_validator)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await gate.authenticate("Bearer stale-token")

        assert exc_info.value.message == "Token validation failed: Token expired"
        assert token_validator.calls == ["stale-token"]

    @pytest.mark.asyncio
    async def test_each_call_validates_again(self, token_validator) -> None:
        """Test results are not cached between requests."""
        gate = AuthGate(token_validator)

        await gate.authenticate("Bearer valid-token")
        await gate.authenticate("Bearer valid-token")

        assert token_validator.calls == ["valid-token", "valid-token"]

    @pytest.mark.asyncio
    async def test_unexpected_validator_failure_is_unauthenticated(self) -> None:
        """Test a validator crash fails closed with the generic reason."""
        validator = AsyncMock()
        validator.validate.side_effect = RuntimeError("invalid URL 'not a url'")
        gate = AuthGate(validator)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await gate.authenticate("Bearer some-token")

        assert exc_info.value.message == "Token validation failed: Invalid or expired token."
        assert "RuntimeError" in exc_info.value.detail
        validator.validate.assert_awaited_once_with("some-token")
