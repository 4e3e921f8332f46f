# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain.

This package provides:
- AuthGate: bearer token extraction and delegated verification
- HttpTokenValidator: client for the remote token validation authority
"""

from academic_progress.domains.auth.service import (
    AUTHORIZATION_HEADER,
    AuthGate,
    extract_bearer_token,
)
from academic_progress.domains.auth.validator import (
    INVALID_TOKEN_REASON,
    HttpTokenValidator,
    TokenValidationError,
    TokenValidator,
)

__all__ = [
    "AUTHORIZATION_HEADER",
    "AuthGate",
    "extract_bearer_token",
    "INVALID_TOKEN_REASON",
    "HttpTokenValidator",
    "TokenValidationError",
    "TokenValidator",
]
