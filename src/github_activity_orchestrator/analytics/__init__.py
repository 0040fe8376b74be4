"""Run analytics: accumulation, persistence and reporting."""

from .accumulator import AnalyticsAccumulator, elapsed_ms
from .exceptions import AnalyticsLifecycleError
from .report import (
    AggregateStats,
    format_duration,
    print_console_summary,
    render_markdown,
    write_markdown_report,
)
from .store import AnalyticsRepository

__all__ = [
    "AggregateStats",
    "AnalyticsAccumulator",
    "AnalyticsLifecycleError",
    "AnalyticsRepository",
    "elapsed_ms",
    "format_duration",
    "print_console_summary",
    "render_markdown",
    "write_markdown_report",
]
