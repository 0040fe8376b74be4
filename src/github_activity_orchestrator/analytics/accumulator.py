"""In-flight run analytics.

One accumulator owns at most one open run. Counters and latencies are
recorded as the workflow progresses; ``end_run`` freezes the record and
appends it to the persisted store.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from github_activity_orchestrator.logging import get_logger
from github_activity_orchestrator.schemas.analytics import RunRecord

from .exceptions import AnalyticsLifecycleError
from .store import AnalyticsRepository

logger = get_logger(__name__)


def elapsed_ms(start: datetime, end: datetime) -> int:
    """Milliseconds from ``start`` to ``end``, clamped at zero.

    Server timestamps come from different clocks and can run backwards.
    """
    return max(0, round((end - start).total_seconds() * 1000))


@dataclass
class _OpenRun:
    started_at: datetime
    issues_created: int = 0
    issues_closed: int = 0
    prs_opened: int = 0
    prs_merged: int = 0
    yolo_merges: int = 0
    comments_posted: int = 0
    co_authored_commits: int = 0
    issue_to_first_comment_ms: list[int] = field(default_factory=list)
    pr_open_to_merge_ms: list[int] = field(default_factory=list)


class AnalyticsAccumulator:
    """Collects metrics for the current run.

    Usage:
        analytics = AnalyticsAccumulator(AnalyticsRepository(path))
        analytics.start_run()
        analytics.record_issue_created()
        record = analytics.end_run()

    Every ``record_*`` method and ``end_run`` raise AnalyticsLifecycleError
    when no run is open.
    """

    def __init__(
        self,
        repository: AnalyticsRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or (lambda: datetime.now(UTC))
        self._run: _OpenRun | None = None

    @property
    def in_flight(self) -> bool:
        return self._run is not None

    def start_run(self) -> None:
        if self._run is not None:
            raise AnalyticsLifecycleError("A run is already in progress")
        self._run = _OpenRun(started_at=self._clock())
        logger.debug("Analytics run started at {}", self._run.started_at.isoformat())

    def _current(self) -> _OpenRun:
        if self._run is None:
            raise AnalyticsLifecycleError("No run in progress; call start_run() first")
        return self._run

    def record_issue_created(self) -> None:
        self._current().issues_created += 1

    def record_issue_closed(self) -> None:
        self._current().issues_closed += 1

    def record_pr_opened(self) -> None:
        self._current().prs_opened += 1

    def record_pr_merged(self) -> None:
        self._current().prs_merged += 1

    def record_yolo_merge(self) -> None:
        self._current().yolo_merges += 1

    def record_comment_posted(self) -> None:
        self._current().comments_posted += 1

    def record_co_authored_commit(self) -> None:
        self._current().co_authored_commits += 1

    def record_issue_to_comment(self, issue_created_at: datetime, comment_created_at: datetime) -> None:
        self._current().issue_to_first_comment_ms.append(
            elapsed_ms(issue_created_at, comment_created_at)
        )

    def record_pr_to_merge(self, pr_created_at: datetime, merged_at: datetime) -> None:
        self._current().pr_open_to_merge_ms.append(elapsed_ms(pr_created_at, merged_at))

    def end_run(self) -> RunRecord:
        """Finalize the open run and persist it.

        The in-flight state is cleared even if persisting fails.

        Returns:
            The frozen RunRecord that was appended to the store
        """
        run = self._current()
        record = RunRecord(
            started_at=run.started_at,
            finished_at=self._clock(),
            issues_created=run.issues_created,
            issues_closed=run.issues_closed,
            prs_opened=run.prs_opened,
            prs_merged=run.prs_merged,
            yolo_merges=run.yolo_merges,
            comments_posted=run.comments_posted,
            co_authored_commits=run.co_authored_commits,
            issue_to_first_comment_ms=list(run.issue_to_first_comment_ms),
            pr_open_to_merge_ms=list(run.pr_open_to_merge_ms),
        )
        try:
            self._repository.append(record)
        finally:
            self._run = None

        logger.info(
            "Run recorded: {} issue(s), {} PR(s), {} merged, {} comment(s)",
            record.issues_created,
            record.prs_opened,
            record.prs_merged,
            record.comments_posted,
        )
        return record
