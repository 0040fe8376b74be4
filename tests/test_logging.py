"""Tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from github_activity_orchestrator.logging import (
    LogContext,
    _console_format,
    bind_issue,
    bind_pr,
    get_logger,
    is_configured,
    reset_logging,
    setup_logging,
)

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_logging_state() -> Generator[None, None, None]:
    """Reset loguru state before and after each test."""
    reset_logging()
    yield
    reset_logging()


def _capture() -> tuple[list[str], int]:
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(str(msg)),
        format="{extra} | {message}",
        level="DEBUG",
    )
    return messages, handler_id


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default_level(self) -> None:
        """Default INFO level setup marks logging configured."""
        setup_logging(level="INFO")
        assert is_configured()

    def test_setup_logging_verbose_overrides_level(self) -> None:
        """Verbose flag lets DEBUG records through."""
        setup_logging(level="WARNING", verbose=True)
        messages, handler_id = _capture()
        try:
            logger.bind(name="test").debug("debug message")
            assert any("debug message" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_setup_logging_with_file(self, tmp_path: Path) -> None:
        """File sink receives named records."""
        log_file = tmp_path / "orchestrator.log"
        setup_logging(level="INFO", log_file=log_file)

        get_logger("test").info("Test file message")
        logger.complete()

        assert log_file.exists()
        assert "Test file message" in log_file.read_text()

    def test_setup_logging_sets_configured_flag(self) -> None:
        """setup_logging flips the configured flag."""
        assert not is_configured()
        setup_logging(level="INFO")
        assert is_configured()


class TestInterceptHandler:
    """Tests for stdlib logging interception."""

    def test_intercept_stdlib_logging(self) -> None:
        """Stdlib records are routed to loguru."""
        setup_logging(level="DEBUG")
        messages, handler_id = _capture()
        try:
            logging.getLogger("test_stdlib_intercept").warning("Hello from stdlib")
            assert any("Hello from stdlib" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_http_stack_quieted_at_info(self) -> None:
        """httpx/httpcore/githubkit stay at WARNING unless debugging."""
        setup_logging(level="INFO")

        for name in ("httpx", "httpcore", "githubkit"):
            assert logging.getLogger(name).level >= logging.WARNING

    def test_http_stack_verbose_when_debugging(self) -> None:
        """Verbose mode lets HTTP debug logs through."""
        setup_logging(level="INFO", verbose=True)

        assert logging.getLogger("httpx").level == logging.DEBUG


class TestContextBinding:
    """Tests for context binding helpers."""

    def test_get_logger_binds_name(self) -> None:
        """get_logger binds the module name."""
        setup_logging(level="DEBUG")
        messages, handler_id = _capture()
        try:
            get_logger("my_test_module").info("Test message")
            assert any("my_test_module" in msg for msg in messages)
        finally:
            logger.remove(handler_id)

    def test_bind_issue(self) -> None:
        """bind_issue adds repo and issue context."""
        setup_logging(level="DEBUG")
        messages, handler_id = _capture()
        try:
            bind_issue("octo", "sandbox", 7).info("Issue message")
            output = "".join(messages)
            assert "octo/sandbox" in output
            assert "'issue': 7" in output
        finally:
            logger.remove(handler_id)

    def test_bind_pr(self) -> None:
        """bind_pr adds repo and PR context."""
        setup_logging(level="DEBUG")
        messages, handler_id = _capture()
        try:
            bind_pr("octo", "sandbox", 123).info("PR message")
            output = "".join(messages)
            assert "octo/sandbox" in output
            assert "'pr': 123" in output
        finally:
            logger.remove(handler_id)

    def test_log_context_manager(self) -> None:
        """LogContext applies only inside the block."""
        setup_logging(level="DEBUG")
        messages, handler_id = _capture()
        try:
            with LogContext(iteration=2):
                logger.info("Inside context")
            logger.info("Outside context")

            inside = next(msg for msg in messages if "Inside context" in msg)
            outside = next(msg for msg in messages if "Outside context" in msg)
            assert "'iteration': 2" in inside
            assert "iteration" not in outside
        finally:
            logger.remove(handler_id)


class TestConsoleFormat:
    """Tests for the console line template."""

    def test_bound_workflow_context_is_shown(self) -> None:
        """Iteration, repo, issue and PR context appear in a fixed order."""
        template = _console_format(
            {"extra": {"name": "workflow.pulls", "pr": 8, "iteration": 2}}  # type: ignore[arg-type]
        )

        assert "{extra[name]}" in template
        assert template.index("iteration={extra[iteration]}") < template.index("pr={extra[pr]}")
        assert "issue=" not in template

    def test_stdlib_records_use_module_name(self) -> None:
        """Records without a bound name fall back to the stdlib logger name."""
        template = _console_format({"extra": {}})  # type: ignore[arg-type]

        assert "{name}" in template
        assert "{extra[name]}" not in template


class TestLogLevels:
    """Tests for log level handling."""

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_log_level_accepted(self, level: str) -> None:
        """Various log levels are accepted."""
        setup_logging(level=level)  # type: ignore[arg-type]
        assert is_configured()


class TestResetLogging:
    """Tests for reset_logging function."""

    def test_reset_logging_clears_configured(self) -> None:
        """reset_logging clears the configured flag."""
        setup_logging(level="INFO")
        assert is_configured()

        reset_logging()
        assert not is_configured()
