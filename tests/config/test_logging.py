"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from howser.config.logging import configure_logging


class TestConfigureLogging:
    def test_debug_enables_howser_loggers(self) -> None:
        configure_logging(debug=True, log_json=False)
        assert logging.getLogger("howser").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging(debug=False, log_json=False)
        assert logging.getLogger("howser").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(debug=True, log_json=True)
        log = structlog.get_logger("howser.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "howser.test"
        assert "timestamp" in parsed

    def test_stdlib_howser_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(debug=True, log_json=True)

        logging.getLogger("howser.domain.matcher").debug("Validated %s: %d problems", "a.md", 2)

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Validated a.md: 2 problems"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "howser.domain.matcher"

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(debug=True, log_json=True)

        logging.getLogger("markdown_it").debug("parser noise")

        captured = capfd.readouterr()
        assert captured.err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(debug=False)
        configure_logging(debug=False)
        assert len(logging.getLogger().handlers) == 1
