# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity models produced by the authentication gate."""

from pydantic import BaseModel, ConfigDict, Field


class IdentityClaim(BaseModel):
    """Verified tenant and user pair for one request.

    Only the authentication gate builds this from a validated credential;
    request input is never trusted for it.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    tenant_id: str = Field(min_length=1, description="Authenticated tenant")
    user_id: str = Field(min_length=1, description="Authenticated user")
