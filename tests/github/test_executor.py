"""Tests for RateLimitedExecutor and GitHubThrottlePolicy.

Tests cover:
- Pass-through of successful and non-throttled calls
- Exactly one sleep and one retry after a throttling failure
- Propagation of the retry's outcome (including a second throttle)
- Delay selection: Retry-After, reset time, default
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from github_activity_orchestrator.config import RateLimitConfig
from github_activity_orchestrator.github.exceptions import (
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from github_activity_orchestrator.github.executor import GitHubThrottlePolicy, RateLimitedExecutor
from tests.conftest import MAR_01, FixedClock


@pytest.fixture
def executor(sleeps):
    return RateLimitedExecutor(GitHubThrottlePolicy(default_wait_seconds=60.0), sleep=sleeps)


class TestRateLimitedExecutor:
    """Tests for the single-retry call wrapper."""

    async def test_success_passes_through(self, executor, sleeps):
        """A successful call runs once with no sleep."""
        operation = AsyncMock(return_value="ok")

        assert await executor.call("op", operation) == "ok"
        assert operation.await_count == 1
        assert sleeps.count == 0

    async def test_non_throttle_error_propagates_immediately(self, executor, sleeps):
        """A 404 is not retried."""
        operation = AsyncMock(side_effect=GitHubNotFoundError("gone", status_code=404))

        with pytest.raises(GitHubNotFoundError):
            await executor.call("op", operation)

        assert operation.await_count == 1
        assert sleeps.count == 0

    async def test_error_without_status_propagates(self, executor, sleeps):
        """Exceptions without a status code are never throttling."""
        operation = AsyncMock(side_effect=ValueError("boom"))

        with pytest.raises(ValueError):
            await executor.call("op", operation)

        assert sleeps.count == 0

    async def test_throttle_then_success_retries_once(self, executor, sleeps):
        """One 429 then success: one sleep of the hinted delay, two invocations."""
        operation = AsyncMock(
            side_effect=[
                GitHubRateLimitError("slow down", status_code=429, retry_after=10),
                "ok",
            ]
        )

        assert await executor.call("create-issue", operation) == "ok"
        assert operation.await_count == 2
        assert sleeps.calls == [10.0]

    async def test_second_throttle_propagates(self, executor, sleeps):
        """A throttled retry is not retried again."""
        throttled = GitHubRateLimitError("slow down", status_code=429, retry_after=1)
        operation = AsyncMock(side_effect=[throttled, throttled])

        with pytest.raises(GitHubRateLimitError):
            await executor.call("op", operation)

        assert operation.await_count == 2
        assert sleeps.count == 1

    async def test_retry_failure_of_other_kind_propagates(self, executor, sleeps):
        """Whatever the retry raises reaches the caller."""
        operation = AsyncMock(
            side_effect=[
                GitHubRateLimitError("slow down", status_code=429),
                GitHubClientError("server error", status_code=502),
            ]
        )

        with pytest.raises(GitHubClientError, match="server error"):
            await executor.call("op", operation)

    async def test_operation_is_reinvoked_not_reawaited(self, executor):
        """Each attempt builds a fresh awaitable."""
        calls = 0

        async def operation():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise GitHubRateLimitError("slow down", status_code=403, retry_after=0)
            return calls

        assert await executor.call("op", operation) == 2


class TestGitHubThrottlePolicy:
    """Tests for throttle detection and delay selection."""

    @pytest.mark.parametrize("status", [403, 429])
    def test_throttle_statuses(self, status):
        """403 and 429 are throttling signals by default."""
        policy = GitHubThrottlePolicy()

        assert policy.is_throttled(GitHubClientError("x", status_code=status))

    @pytest.mark.parametrize("status", [None, 401, 404, 422, 500])
    def test_other_statuses_not_throttled(self, status):
        """Everything else is not."""
        policy = GitHubThrottlePolicy()

        assert not policy.is_throttled(GitHubClientError("x", status_code=status))

    def test_retry_after_wins(self):
        """The server's Retry-After hint is used verbatim."""
        policy = GitHubThrottlePolicy(default_wait_seconds=60)
        error = GitHubRateLimitError(
            "x", status_code=429, retry_after=5, reset_at=MAR_01 + timedelta(minutes=10)
        )

        assert policy.retry_delay(error) == 5.0

    def test_reset_time_used_without_retry_after(self):
        """Without a hint, wait until the quota resets."""
        policy = GitHubThrottlePolicy(clock=FixedClock(MAR_01))
        error = GitHubRateLimitError(
            "x", status_code=403, reset_at=MAR_01 + timedelta(seconds=42)
        )

        assert policy.retry_delay(error) == 42.0

    def test_distant_reset_time_capped_at_default(self):
        """A quota reset far in the future waits only the default."""
        policy = GitHubThrottlePolicy(default_wait_seconds=60, clock=FixedClock(MAR_01))
        error = GitHubRateLimitError(
            "x", status_code=403, reset_at=MAR_01 + timedelta(minutes=55)
        )

        assert policy.retry_delay(error) == 60.0

    def test_past_reset_time_clamps_to_zero(self):
        """A reset time already in the past means no wait."""
        policy = GitHubThrottlePolicy(clock=FixedClock(MAR_01))
        error = GitHubRateLimitError("x", status_code=403, reset_at=MAR_01 - timedelta(seconds=5))

        assert policy.retry_delay(error) == 0.0

    def test_default_wait(self):
        """No hint at all falls back to the default."""
        policy = GitHubThrottlePolicy(default_wait_seconds=60)

        assert policy.retry_delay(GitHubClientError("x", status_code=403)) == 60.0

    def test_from_config(self):
        """Custom status codes and default wait come from configuration."""
        policy = GitHubThrottlePolicy.from_config(
            RateLimitConfig(default_wait_seconds=7, throttle_status_codes=[503])
        )

        assert policy.is_throttled(GitHubClientError("x", status_code=503))
        assert not policy.is_throttled(GitHubClientError("x", status_code=429))
        assert policy.retry_delay(GitHubClientError("x", status_code=503)) == 7.0
