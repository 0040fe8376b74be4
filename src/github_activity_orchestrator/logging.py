"""Logging for the orchestrator, built on loguru.

Console lines carry the workflow context bound to a record, so the steps
of one iteration read as a unit:

    09:00:05 | INFO     | ...workflow.issues iteration=1 issue=7 - Created issue: ...

Also routes stdlib logging (httpx/httpcore under githubkit) into loguru and
can mirror everything to a rotating file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Extra keys shown on console lines, in this order
CONTEXT_KEYS = ("iteration", "repo", "issue", "pr")

_HTTP_LOGGERS = ("httpx", "httpcore", "githubkit")

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[name]}:{function}:{line} | {extra} | {message}"
)

_configured = False


def _console_format(record: Record) -> str:
    extra = record["extra"]
    # Intercepted stdlib records have no bound name
    source = "{extra[name]}" if "name" in extra else "{name}"
    context = "".join(f" {key}={{extra[{key}]}}" for key in CONTEXT_KEYS if key in extra)
    return (
        "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | "
        f"<cyan>{source}</cyan><dim>{context}</dim> - <level>{{message}}</level>\n{{exception}}"
    )


class InterceptHandler(logging.Handler):
    """Route standard library log records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        from types import FrameType

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _effective_level(level: LogLevel, verbose: bool, quiet: bool) -> LogLevel:
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return level


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Configure console (and optionally file) logging.

    Args:
        level: Base log level from config
        verbose: Force DEBUG; wins over ``quiet``
        quiet: Force WARNING
        log_file: Rotating log file; it always records DEBUG and up
        rotation: When to rotate the log file (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept
        serialize: Write the file as JSON lines
    """
    global _configured

    effective = _effective_level(level, verbose, quiet)

    logger.remove()
    logger.add(
        sys.stderr,
        level=effective,
        format=_console_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            format=_FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
            serialize=serialize,
            filter=lambda record: "name" in record["extra"],
        )

    _intercept_stdlib_logging(effective)

    _configured = True
    return logger


def _intercept_stdlib_logging(level: LogLevel) -> None:
    """Send stdlib logging through loguru and quiet the HTTP stack."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    http_level = logging.DEBUG if level in ("TRACE", "DEBUG") else logging.WARNING
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> Logger:
    """Get a logger with ``name`` bound.

    Usage:
        logger = get_logger(__name__)
        logger.info("Starting run")
    """
    return logger.bind(name=name)


def bind_issue(owner: str, repo: str, issue_number: int) -> Logger:
    """Logger for lines about one issue."""
    return logger.bind(name="workflow.issues", repo=f"{owner}/{repo}", issue=issue_number)


def bind_pr(owner: str, repo: str, pr_number: int) -> Logger:
    """Logger for lines about one pull request."""
    return logger.bind(name="workflow.pulls", repo=f"{owner}/{repo}", pr=pr_number)


class LogContext:
    """Bind context to every record logged inside the block.

    Usage:
        with LogContext(iteration=2):
            logger.info("Creating issue")  # carries iteration=2
    """

    def __init__(self, **context: Any) -> None:
        self._context = context
        self._token: Any = None

    def __enter__(self) -> Logger:
        self._token = logger.contextualize(**self._context)
        self._token.__enter__()
        return logger

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._token:
            self._token.__exit__(exc_type, exc_val, exc_tb)


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Drop every sink (used by tests)."""
    global _configured
    logger.remove()
    _configured = False
