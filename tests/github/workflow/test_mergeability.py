"""Tests for MergeabilityPoller."""

from unittest.mock import AsyncMock

import pytest

from github_activity_orchestrator.config import MergeabilityConfig
from github_activity_orchestrator.github.exceptions import GitHubNotFoundError
from github_activity_orchestrator.github.workflow.mergeability import MergeabilityPoller
from github_activity_orchestrator.schemas import MergeState

U = MergeState.UNKNOWN
M = MergeState.MERGEABLE
N = MergeState.NOT_MERGEABLE


def make_poller(states, sleeps, *, max_attempts=5, interval=3.0):
    check = AsyncMock(side_effect=list(states))
    poller = MergeabilityPoller(
        check,
        MergeabilityConfig(max_attempts=max_attempts, poll_interval_seconds=interval),
        sleep=sleeps,
    )
    return poller, check


class TestMergeabilityPoller:
    """Tests for bounded mergeability polling."""

    async def test_mergeable_on_first_poll(self, sleeps):
        """An immediate MERGEABLE needs one poll and no sleep."""
        poller, check = make_poller([M], sleeps)

        assert await poller.is_mergeable(8) is True
        assert check.await_count == 1
        assert sleeps.count == 0

    async def test_resolves_after_unknowns(self, sleeps):
        """[UNKNOWN, UNKNOWN, MERGEABLE] is True after exactly 3 polls."""
        poller, check = make_poller([U, U, M], sleeps)

        assert await poller.is_mergeable(8) is True
        assert check.await_count == 3
        assert sleeps.calls == [3.0, 3.0]

    async def test_not_mergeable_stops_immediately(self, sleeps):
        """NOT_MERGEABLE ends polling without using the budget."""
        poller, check = make_poller([U, N, M], sleeps)

        assert await poller.is_mergeable(8) is False
        assert check.await_count == 2

    async def test_budget_exhausted_returns_false(self, sleeps):
        """Five UNKNOWNs give False after exactly 5 polls, never a sixth."""
        poller, check = make_poller([U] * 6, sleeps)

        assert await poller.is_mergeable(8) is False
        assert check.await_count == 5
        assert sleeps.count == 4

    async def test_custom_budget(self, sleeps):
        """max_attempts comes from configuration."""
        poller, check = make_poller([U, U, U], sleeps, max_attempts=2, interval=0.5)

        assert poller.max_attempts == 2
        assert await poller.is_mergeable(8) is False
        assert check.await_count == 2
        assert sleeps.calls == [0.5]

    async def test_check_errors_propagate(self, sleeps):
        """A transport error is not a merge state."""
        poller, _ = make_poller([GitHubNotFoundError("gone", status_code=404)], sleeps)

        with pytest.raises(GitHubNotFoundError):
            await poller.is_mergeable(8)

    async def test_polls_the_requested_pr(self, sleeps):
        """The PR number is forwarded on every poll."""
        poller, check = make_poller([U, M], sleeps)

        await poller.is_mergeable(42)

        assert [c.args for c in check.await_args_list] == [(42,), (42,)]
