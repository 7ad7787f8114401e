"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from monitorsvc.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("monitorsvc")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
    structlog.contextvars.clear_contextvars()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("monitorsvc").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("monitorsvc").level == logging.WARNING

    def test_noisy_libraries_are_quieted(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("monitorsvc.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "monitorsvc.test"
        assert "timestamp" in parsed

    def test_context_vars_are_merged(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        structlog.contextvars.bind_contextvars(request_id="abc123")
        structlog.get_logger("monitorsvc.test").info("bound")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["request_id"] == "abc123"

    def test_debug_suppressed_when_not_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        structlog.get_logger("monitorsvc.test").debug("hidden")
        assert capfd.readouterr().err.strip() == ""

    def test_json_tracebacks_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        try:
            raise ValueError("boom")
        except ValueError:
            structlog.get_logger("monitorsvc.test").error("failed", exc_info=True)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["exception"][0]["exc_type"] == "ValueError"
