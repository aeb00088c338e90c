"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from guardedbuild.config.logging import configure_logging
from guardedbuild.domain.report import ReportBuilder


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("guardedbuild").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_quiet_by_default(self) -> None:
        configure_logging()
        assert logging.getLogger("guardedbuild").level == logging.WARNING

    def test_single_handler_after_repeat_calls(self) -> None:
        configure_logging(verbose=True)
        configure_logging(log_json=True)
        assert len(logging.getLogger().handlers) == 1

    def test_json_lines(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.get_logger("guardedbuild.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "guardedbuild.test"
        assert "timestamp" in parsed

    def test_build_emits_debug_record(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        ReportBuilder().try_build()
        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines() if line]
        events = [line for line in lines if line["logger"] == "guardedbuild.domain.builder"]
        assert events[0]["event"] == "Build ReportBuilder: 1 problem(s)"
        assert events[0]["level"] == "debug"

    def test_build_silent_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        ReportBuilder().try_build()
        assert capfd.readouterr().err == ""
