"""Tests for AnalyticsAccumulator."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from github_activity_orchestrator.analytics import (
    AnalyticsAccumulator,
    AnalyticsLifecycleError,
    AnalyticsRepository,
    elapsed_ms,
)
from tests.conftest import MAR_01, MAR_01_END, MAR_01_ISSUE, FixedClock


@pytest.fixture
def repository(analytics_path):
    return AnalyticsRepository(analytics_path)


@pytest.fixture
def analytics(repository):
    return AnalyticsAccumulator(repository, clock=FixedClock(MAR_01, MAR_01_END))


COUNTERS = {
    "record_issue_created": "issues_created",
    "record_issue_closed": "issues_closed",
    "record_pr_opened": "prs_opened",
    "record_pr_merged": "prs_merged",
    "record_yolo_merge": "yolo_merges",
    "record_comment_posted": "comments_posted",
    "record_co_authored_commit": "co_authored_commits",
}


class TestLifecycle:
    """Tests for start/end and misuse."""

    def test_start_and_end(self, analytics, repository):
        """A run is stamped, persisted and closed."""
        analytics.start_run()
        assert analytics.in_flight

        record = analytics.end_run()

        assert record.started_at == MAR_01
        assert record.finished_at == MAR_01_END
        assert not analytics.in_flight
        assert repository.load().runs == [record]

    def test_start_twice_raises(self, analytics):
        """Only one run can be open."""
        analytics.start_run()

        with pytest.raises(AnalyticsLifecycleError):
            analytics.start_run()

    @pytest.mark.parametrize("method", sorted(COUNTERS))
    def test_record_without_run_raises(self, analytics, method):
        """Every recorder requires an open run."""
        with pytest.raises(AnalyticsLifecycleError):
            getattr(analytics, method)()

    def test_latency_without_run_raises(self, analytics):
        """Latency recorders also require an open run."""
        with pytest.raises(AnalyticsLifecycleError):
            analytics.record_issue_to_comment(MAR_01, MAR_01_ISSUE)

    def test_end_without_run_raises(self, analytics, repository):
        """end_run without start_run persists nothing."""
        with pytest.raises(AnalyticsLifecycleError):
            analytics.end_run()

        assert not repository.path.exists()

    def test_failed_save_closes_run(self):
        """A store that cannot be written still leaves the accumulator reusable."""
        repository = MagicMock()
        repository.append.side_effect = OSError("disk full")
        analytics = AnalyticsAccumulator(repository, clock=FixedClock(MAR_01, MAR_01_END))
        analytics.start_run()
        analytics.record_issue_created()

        with pytest.raises(OSError, match="disk full"):
            analytics.end_run()

        assert not analytics.in_flight
        analytics.start_run()
        assert analytics.in_flight

    def test_runs_append(self, repository):
        """Consecutive runs accumulate in the store."""
        analytics = AnalyticsAccumulator(repository)
        for _ in range(3):
            analytics.start_run()
            analytics.record_issue_created()
            analytics.end_run()

        assert [run.issues_created for run in repository.load().runs] == [1, 1, 1]


class TestRecording:
    """Tests for counters and latencies."""

    @pytest.mark.parametrize(("method", "field"), sorted(COUNTERS.items()))
    def test_each_recorder_touches_one_field(self, analytics, method, field):
        """A recorder increments its own counter and nothing else."""
        analytics.start_run()
        getattr(analytics, method)()
        getattr(analytics, method)()
        record = analytics.end_run()

        for other in COUNTERS.values():
            assert getattr(record, other) == (2 if other == field else 0)

    def test_latencies_keep_order(self, analytics):
        """Latency samples are stored in arrival order, in milliseconds."""
        analytics.start_run()
        analytics.record_issue_to_comment(MAR_01, MAR_01 + timedelta(seconds=3))
        analytics.record_issue_to_comment(MAR_01, MAR_01 + timedelta(milliseconds=1500))
        analytics.record_pr_to_merge(MAR_01, MAR_01 + timedelta(minutes=2))
        record = analytics.end_run()

        assert record.issue_to_first_comment_ms == [3000, 1500]
        assert record.pr_open_to_merge_ms == [120000]

    def test_negative_latency_clamps_to_zero(self, analytics):
        """Clock skew never produces negative durations."""
        analytics.start_run()
        analytics.record_issue_to_comment(MAR_01_ISSUE, MAR_01)
        analytics.record_pr_to_merge(MAR_01_ISSUE, MAR_01)
        record = analytics.end_run()

        assert record.issue_to_first_comment_ms == [0]
        assert record.pr_open_to_merge_ms == [0]

    def test_new_run_starts_from_zero(self, analytics):
        """Counters do not leak between runs."""
        analytics.start_run()
        analytics.record_pr_opened()
        analytics.end_run()

        analytics.start_run()
        record = analytics.end_run()

        assert record.prs_opened == 0


class TestElapsedMs:
    """Tests for elapsed_ms."""

    def test_positive(self):
        assert elapsed_ms(MAR_01, MAR_01 + timedelta(seconds=1, milliseconds=250)) == 1250

    def test_negative_clamped(self):
        assert elapsed_ms(MAR_01 + timedelta(seconds=1), MAR_01) == 0
