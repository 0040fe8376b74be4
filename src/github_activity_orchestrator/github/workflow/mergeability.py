"""Polling a pull request's merge readiness.

GitHub computes ``mergeable`` in the background and answers ``null`` until
it is done. The poller keeps asking for a bounded number of attempts and
never reports "mergeable" unless GitHub actually said so.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from github_activity_orchestrator.config import MergeabilityConfig
from github_activity_orchestrator.logging import get_logger
from github_activity_orchestrator.schemas.enums import MergeState

logger = get_logger(__name__)

MergeStateCheck = Callable[[int], Awaitable[MergeState]]


class MergeabilityPoller:
    """Resolves the tri-state merge readiness into a yes/no answer.

    Usage:
        poller = MergeabilityPoller(pr_service.check_merge_state)
        if await poller.is_mergeable(pr.number):
            ...

    Errors raised by ``check_merge_state`` are not retried here; they
    propagate to the caller.
    """

    def __init__(
        self,
        check_merge_state: MergeStateCheck,
        config: MergeabilityConfig | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._check = check_merge_state
        self._config = config or MergeabilityConfig()
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self._config.max_attempts

    async def is_mergeable(self, pr_number: int) -> bool:
        """Poll until the state resolves or the attempt budget runs out.

        Returns:
            True only on an explicit MERGEABLE; False on NOT_MERGEABLE or if
            the state was still UNKNOWN after ``max_attempts`` polls
        """
        attempts = self._config.max_attempts
        for attempt in range(1, attempts + 1):
            state = await self._check(pr_number)
            if state == MergeState.MERGEABLE:
                return True
            if state == MergeState.NOT_MERGEABLE:
                return False

            if attempt < attempts:
                logger.debug(
                    "PR #{} mergeable status unknown (attempt {}/{}). Waiting...",
                    pr_number,
                    attempt,
                    attempts,
                )
                await self._sleep(self._config.poll_interval_seconds)

        logger.warning(
            "Could not determine mergeable status for PR #{} after {} attempts",
            pr_number,
            attempts,
        )
        return False
