"""Unit tests for logging helpers."""

import logging
from unittest.mock import patch

import pytest

from src.core import logging as core_logging


@pytest.mark.unit
class TestLoggingHelpers:
    """Tests for Logfire configuration and structured logging."""

    def test_configure_logfire_only_sends_with_token(self):
        with patch("src.core.logging.logfire") as mock_logfire:
            core_logging.configure_logfire()

        kwargs = mock_logfire.configure.call_args.kwargs
        assert kwargs["service_name"] == "crewcal"
        assert kwargs["send_to_logfire"] == "if-token-present"

    def test_span_wraps_logfire_span(self):
        with patch("src.core.logging.logfire") as mock_logfire:
            core_logging.span("filter_service.apply")

        mock_logfire.span.assert_called_once_with("filter_service.apply")

    def test_log_with_context_passes_extra(self, caplog):
        logger = logging.getLogger("tests.logging")

        with caplog.at_level(logging.INFO, logger="tests.logging"):
            core_logging.log_with_context(logger, "info", "Bucketed", mode="week", task_count=3)

        record = caplog.records[-1]
        assert record.message == "Bucketed"
        assert record.mode == "week"
        assert record.task_count == 3

    def test_log_with_screen_context(self, caplog):
        logger = logging.getLogger("tests.logging")

        with caplog.at_level(logging.WARNING, logger="tests.logging"):
            core_logging.log_with_screen_context(logger, "warning", "Load failed", screen="tasks", error_code="X")
            core_logging.log_with_screen_context(logger, "warning", "No screen")

        assert caplog.records[0].screen == "tasks"
        assert caplog.records[0].error_code == "X"
        assert not hasattr(caplog.records[1], "screen")
