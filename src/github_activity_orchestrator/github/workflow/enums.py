"""Enums for workflow operations."""

from enum import Enum


class IterationStatus(str, Enum):
    """Terminal state of one issue -> PR -> merge iteration."""

    COMPLETED = "completed"
    """Every step ran. An unmergeable PR that was skipped still counts."""

    PARTIAL_FAILURE = "partial_failure"
    """A step raised; later steps of this iteration were abandoned."""


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable text output."""

    JSON = "json"
    """Machine-readable JSON output."""
