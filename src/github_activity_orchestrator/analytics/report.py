"""Aggregate statistics and their console and Markdown renderings."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from github_activity_orchestrator.logging import get_logger
from github_activity_orchestrator.schemas.analytics import RunRecord

logger = get_logger(__name__)


def _mean(values: Sequence[int]) -> float:
    return sum(values) / len(values) if values else 0.0


@dataclass(frozen=True)
class AggregateStats:
    """Totals across every persisted run.

    Averages are means over the flattened latency lists of all runs, not
    means of per-run means. An empty series averages to 0.
    """

    total_runs: int = 0
    total_issues_created: int = 0
    total_issues_closed: int = 0
    total_prs_opened: int = 0
    total_prs_merged: int = 0
    total_yolo_merges: int = 0
    total_comments: int = 0
    total_co_authored_commits: int = 0
    avg_issue_to_comment_ms: float = 0.0
    avg_pr_to_merge_ms: float = 0.0

    @classmethod
    def from_runs(cls, runs: Sequence[RunRecord]) -> AggregateStats:
        return cls(
            total_runs=len(runs),
            total_issues_created=sum(r.issues_created for r in runs),
            total_issues_closed=sum(r.issues_closed for r in runs),
            total_prs_opened=sum(r.prs_opened for r in runs),
            total_prs_merged=sum(r.prs_merged for r in runs),
            total_yolo_merges=sum(r.yolo_merges for r in runs),
            total_comments=sum(r.comments_posted for r in runs),
            total_co_authored_commits=sum(r.co_authored_commits for r in runs),
            avg_issue_to_comment_ms=_mean([ms for r in runs for ms in r.issue_to_first_comment_ms]),
            avg_pr_to_merge_ms=_mean([ms for r in runs for ms in r.pr_open_to_merge_ms]),
        )

    def rows(self) -> list[tuple[str, str]]:
        """(label, formatted value) pairs, in display order."""
        return [
            ("Total runs", str(self.total_runs)),
            ("Issues created", str(self.total_issues_created)),
            ("Issues closed", str(self.total_issues_closed)),
            ("PRs opened", str(self.total_prs_opened)),
            ("PRs merged", str(self.total_prs_merged)),
            ("YOLO merges", str(self.total_yolo_merges)),
            ("Comments posted", str(self.total_comments)),
            ("Co-authored commits", str(self.total_co_authored_commits)),
            ("Avg issue → first comment", format_duration(self.avg_issue_to_comment_ms)),
            ("Avg PR open → merge", format_duration(self.avg_pr_to_merge_ms)),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def format_duration(ms: float) -> str:
    """Render milliseconds as ``n/a``, ``42s`` or ``3m 5s``."""
    if ms == 0:
        return "n/a"
    seconds = math.floor(ms / 1000 + 0.5)
    if seconds < 60:
        return f"{seconds}s"
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}m {remaining}s"


def render_markdown(stats: AggregateStats, now: datetime | None = None) -> str:
    """Render the aggregate stats as a Markdown table."""
    updated = (now or datetime.now(UTC)).isoformat()
    lines = [
        "## Orchestrator Analytics",
        "",
        f"_Last updated: {updated}_",
        "",
        "| Metric | Value |",
        "| --- | ---: |",
    ]
    lines.extend(f"| {label} | {value} |" for label, value in stats.rows())
    lines.append("")
    return "\n".join(lines)


def write_markdown_report(
    stats: AggregateStats,
    path: str | Path,
    now: Callable[[], datetime] | None = None,
) -> bool:
    """Overwrite the Markdown report at ``path``.

    A failed write is logged and reported through the return value; it
    never fails the run.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_markdown(stats, now() if now else None), encoding="utf-8")
    except OSError as e:
        logger.warning("Could not write Markdown report to {}: {}", target, e)
        return False
    logger.info("Markdown analytics report written to {}", target)
    return True


def print_console_summary(stats: AggregateStats, console: Console) -> None:
    table = Table(title="GitHub Activity Orchestrator Stats")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right", style="cyan")
    for label, value in stats.rows():
        table.add_row(label, value)
    console.print(table)
