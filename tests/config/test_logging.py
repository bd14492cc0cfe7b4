"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from followctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ours = logging.getLogger("followctl")
    our_level = ours.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ours.setLevel(our_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("followctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("followctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("followctl.test")
        log.warning("user.followed", follower_id=1, following_id=2)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "user.followed"
        assert parsed["follower_id"] == 1
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "followctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("followctl.infrastructure.store").debug("store opened")

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "store opened"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "followctl.infrastructure.store"

    def test_exception_becomes_string_field(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        log = structlog.get_logger("followctl.test")
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            log.error("service.internal_error", exc_info=exc)

        parsed = json.loads(capfd.readouterr().err.strip())
        assert "RuntimeError: boom" in parsed["exception"]

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("alembic").debug("migration noise")
        logging.getLogger("sqlalchemy.engine").debug("pool noise")

        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
