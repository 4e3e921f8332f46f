# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cross-cutting utilities: structured logging with structlog."""

from academic_progress.utils.logging import bind_context, clear_context, setup_logging

__all__ = [
    "setup_logging",
    "bind_context",
    "clear_context",
]
