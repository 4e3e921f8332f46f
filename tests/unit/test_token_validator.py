# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the HTTP token validator."""

import json
from collections.abc import Callable

import httpx
import pytest

from academic_progress.core.config.settings import TokenValidatorSettings
from academic_progress.domains.auth.validator import (
    INVALID_TOKEN_REASON,
    HttpTokenValidator,
    TokenValidationError,
)

VALIDATE_URL = "http://auth.test/validate"


def _validator(handler: Callable[[httpx.Request], httpx.Response]) -> HttpTokenValidator:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTokenValidator(client=client, url=VALIDATE_URL)


class TestHttpTokenValidatorSuccess:
    """Tests for accepted tokens."""

    @pytest.mark.asyncio
    async def test_sends_token_and_returns_claim(self) -> None:
        """Test the token is posted and the claim is returned verbatim."""
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={"statusCode": 200, "body": {"tenant_id": "t1", "user_id": "u1"}},
            )

        claim = await _validator(handler).validate("abc")

        assert seen == [{"token": "abc"}]
        assert claim.tenant_id == "t1"
        assert claim.user_id == "u1"

    @pytest.mark.asyncio
    async def test_decodes_string_body(self) -> None:
        """Test a JSON-encoded string body is decoded a second time."""

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.dumps({"tenant_id": "T-9", "user_id": " u 1 "})
            return httpx.Response(200, json={"statusCode": 200, "body": body})

        claim = await _validator(handler).validate("abc")

        assert claim.tenant_id == "T-9"
        assert claim.user_id == " u 1 "

    @pytest.mark.asyncio
    async def test_accepts_bare_document(self) -> None:
        """Test an authority answering without an envelope."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"tenant_id": "t1", "user_id": "u1"})

        claim = await _validator(handler).validate("abc")

        assert claim.tenant_id == "t1"


class TestHttpTokenValidatorFailure:
    """Tests for rejected tokens and failed calls."""

    @pytest.mark.asyncio
    async def test_reports_authority_reason(self) -> None:
        """Test the authority's error message becomes the reason."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"statusCode": 403, "body": json.dumps({"error": "Token expired"})},
            )

        with pytest.raises(TokenValidationError) as exc_info:
            await _validator(handler).validate("abc")

        assert exc_info.value.reason == "Token expired"

    @pytest.mark.asyncio
    async def test_generic_reason_without_error_field(self) -> None:
        """Test a rejection without error field uses the generic reason."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"statusCode": 401, "body": {}})

        with pytest.raises(TokenValidationError) as exc_info:
            await _validator(handler).validate("abc")

        assert exc_info.value.reason == INVALID_TOKEN_REASON

    @pytest.mark.asyncio
    async def test_http_error_status_without_envelope(self) -> None:
        """Test a non-envelope HTTP error uses the HTTP status."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "Unknown token"})

        with pytest.raises(TokenValidationError) as exc_info:
            await _validator(handler).validate("abc")

        assert exc_info.value.reason == "Unknown token"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test a timeout is a validation failure, never a success."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(TokenValidationError) as exc_info:
            await _validator(handler).validate("abc")

        assert exc_info.value.reason == INVALID_TOKEN_REASON
        assert "ConnectTimeout" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_non_json_response(self) -> None:
        """Test a non-JSON response is a validation failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        with pytest.raises(TokenValidationError):
            await _validator(handler).validate("abc")

    @pytest.mark.asyncio
    async def test_undecodable_string_body(self) -> None:
        """Test a string body that is not JSON is a validation failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"statusCode": 200, "body": "not json"})

        with pytest.raises(TokenValidationError):
            await _validator(handler).validate("abc")

    @pytest.mark.asyncio
    async def test_claim_missing_user_id(self) -> None:
        """Test a success response without user_id is a validation failure."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"statusCode": 200, "body": {"tenant_id": "t1"}})

        with pytest.raises(TokenValidationError) as exc_info:
            await _validator(handler).validate("abc")

        assert "Malformed identity claim" in exc_info.value.detail


class TestHttpTokenValidatorFromSettings:
    """Tests for building the validator from settings."""

    @pytest.mark.asyncio
    async def test_from_settings_configures_client(self) -> None:
        """Test the client gets the configured timeout and headers."""
        settings = TokenValidatorSettings(
            url=VALIDATE_URL,
            timeout=3.0,
            api_key="k",  # type: ignore[arg-type]
        )

        validator = HttpTokenValidator.from_settings(settings)
        try:
            assert validator._url == VALIDATE_URL
            assert validator._client.timeout.connect == 3.0
            assert validator._client.headers["X-API-Key"] == "k"
        finally:
            await validator.aclose()
