# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic progress domain package.

This package provides:
- ProgressService: record and retrieve academic progress
- ProgressStore: conditional insert and partition query over the table
"""

from academic_progress.domains.progress.service import (
    MISSING_FIELDS_MESSAGE,
    ProgressService,
    group_by_level,
    parse_payload,
    validate_payload,
)
from academic_progress.domains.progress.store import ProgressStore, RecordExistsError

__all__ = [
    "MISSING_FIELDS_MESSAGE",
    "ProgressService",
    "group_by_level",
    "parse_payload",
    "validate_payload",
    "ProgressStore",
    "RecordExistsError",
]
