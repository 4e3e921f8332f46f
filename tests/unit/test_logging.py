# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for structured logging setup."""

import json
import logging

import pytest
import structlog

from academic_progress.core.config.settings import DatabaseSettings, Settings
from academic_progress.utils.logging import bind_context, clear_context, setup_logging


@pytest.fixture
def restore_logging():
    """Restore root logging and structlog configuration after the test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    clear_context()
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_production_renders_json_with_context(self, restore_logging, capsys) -> None:
        """Test stdlib records are rendered as JSON with bound context."""
        settings = Settings(
            environment="production",
            debug=False,
            log_level="INFO",
            database=DatabaseSettings(password="not-the-default"),  # type: ignore[arg-type]
        )
        setup_logging(settings)

        bind_context(request_id="req-1")
        logging.getLogger("academic_progress.tests").info("Recorded %s", "C101")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "Recorded C101"
        assert event["request_id"] == "req-1"
        assert event["level"] == "info"
        assert event["logger"] == "academic_progress.tests"

    def test_context_is_cleared(self, restore_logging, capsys) -> None:
        """Test cleared context no longer appears in records."""
        settings = Settings(
            environment="production",
            debug=False,
            log_level="INFO",
            database=DatabaseSettings(password="not-the-default"),  # type: ignore[arg-type]
        )
        setup_logging(settings)

        bind_context(request_id="req-2")
        clear_context()
        logging.getLogger("academic_progress.tests").warning("After request")

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert "request_id" not in event
