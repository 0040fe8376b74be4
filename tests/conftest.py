"""Pytest configuration and shared fixtures.

Usage Guide:
- For GitHub API response dicts: import factories from tests.factories
- For workflow tests: use the ``sleeps`` recorder so nothing actually waits
- For analytics tests: use ``analytics_path`` (a fresh file under tmp_path)
"""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from github_activity_orchestrator.config import Settings

# -----------------------------------------------------------------------------
# Test Timeline Constants
#
# Define a consistent "test epoch" for deterministic latency assertions.
# All hardcoded dates should reference these constants for consistency.
# -----------------------------------------------------------------------------

# Base dates (datetime objects for Pydantic/results)
MAR_01 = datetime(2025, 3, 1, 9, 0, 0, tzinfo=UTC)                     # Run starts
MAR_01_ISSUE = datetime(2025, 3, 1, 9, 0, 5, tzinfo=UTC)               # Issue created
MAR_01_COMMENT = MAR_01_ISSUE + timedelta(seconds=2)                   # First comment
MAR_01_PR = datetime(2025, 3, 1, 9, 0, 20, tzinfo=UTC)                 # PR opened
MAR_01_MERGE = MAR_01_PR + timedelta(seconds=30)                       # PR merged
MAR_01_END = datetime(2025, 3, 1, 9, 5, 0, tzinfo=UTC)                 # Run finalized

# ISO 8601 strings (for GitHub API mocks)
MAR_01_ISSUE_ISO = "2025-03-01T09:00:05Z"
MAR_01_COMMENT_ISO = "2025-03-01T09:00:07Z"
MAR_01_PR_ISO = "2025-03-01T09:00:20Z"


class SleepRecorder:
    """Awaitable stand-in for asyncio.sleep that records durations."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def count(self) -> int:
        return len(self.calls)


class FixedClock:
    """Clock returning queued timestamps, then repeating the last one."""

    def __init__(self, *times: datetime) -> None:
        self._times = list(times) or [MAR_01]
        self._index = 0

    def __call__(self) -> datetime:
        value = self._times[min(self._index, len(self._times) - 1)]
        self._index += 1
        return value


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sleeps() -> SleepRecorder:
    """Injectable sleep that returns immediately."""
    return SleepRecorder()


@pytest.fixture
def analytics_path(tmp_path: Path) -> Path:
    """Path for a not-yet-existing analytics store."""
    return tmp_path / "data" / "analytics.json"


@pytest.fixture
def settings() -> Settings:
    """Settings for a sandbox repo, independent of the environment."""
    return Settings(
        _env_file=None,
        github_token="test-token",
        github_owner="octo",
        github_repo="sandbox",
        max_issues_per_run=1,
        max_prs_per_run=1,
    )
