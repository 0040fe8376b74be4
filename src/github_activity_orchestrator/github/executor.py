"""Rate-limit aware execution of remote calls.

Every GitHub call made by the workflow goes through
:class:`RateLimitedExecutor`. When GitHub throttles a call, the executor
waits for the interval the server asked for and retries exactly once.
Anything else, including a second throttle, propagates to the caller.

Throttle detection is pluggable through :class:`ThrottlePolicy` so the
executor does not depend on a particular HTTP client's error shape.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from datetime import UTC, datetime
from typing import Protocol, TypeVar

from github_activity_orchestrator.config import RateLimitConfig
from github_activity_orchestrator.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[None]]


class ThrottlePolicy(Protocol):
    """Decides whether a failure is a throttling signal and how long to back off."""

    def is_throttled(self, error: BaseException) -> bool: ...

    def retry_delay(self, error: BaseException) -> float: ...


class GitHubThrottlePolicy:
    """Throttle policy for GitHub's REST API.

    A failure is throttled when it carries a ``status_code`` in the
    configured set (403 and 429 by default). The delay is the
    ``retry_after`` hint on the error when present; failing that, the time
    until ``reset_at`` capped at the configured default; failing that, the
    default itself. A throttled call never waits longer than the default
    unless the server explicitly asked for it.
    """

    def __init__(
        self,
        default_wait_seconds: float = 60.0,
        status_codes: Iterable[int] = (403, 429),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._default_wait = default_wait_seconds
        self._status_codes = frozenset(status_codes)
        self._clock = clock or (lambda: datetime.now(UTC))

    @classmethod
    def from_config(cls, config: RateLimitConfig) -> GitHubThrottlePolicy:
        return cls(
            default_wait_seconds=config.default_wait_seconds,
            status_codes=config.throttle_status_codes,
        )

    def is_throttled(self, error: BaseException) -> bool:
        return getattr(error, "status_code", None) in self._status_codes

    def retry_delay(self, error: BaseException) -> float:
        retry_after = getattr(error, "retry_after", None)
        if isinstance(retry_after, int | float) and retry_after >= 0:
            return float(retry_after)

        reset_at = getattr(error, "reset_at", None)
        if isinstance(reset_at, datetime):
            until_reset = (reset_at - self._clock()).total_seconds()
            return min(max(until_reset, 0.0), self._default_wait)

        return self._default_wait


class RateLimitedExecutor:
    """Runs remote operations with a single throttling retry.

    Usage:
        executor = RateLimitedExecutor(GitHubThrottlePolicy())
        issue = await executor.call(
            "create-issue",
            lambda: client.create_issue(owner, repo, title=title, body=body),
        )

    The operation must be safe to run twice. Content writes are made
    idempotent by upserting on path.
    """

    def __init__(
        self,
        policy: ThrottlePolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the executor.

        Args:
            policy: Throttle detection policy (GitHub's by default)
            sleep: Awaitable sleep, injectable for tests
        """
        self._policy = policy or GitHubThrottlePolicy()
        self._sleep = sleep

    @property
    def policy(self) -> ThrottlePolicy:
        return self._policy

    async def call(self, label: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation``, retrying once if it was throttled.

        Args:
            label: Short name of the operation, used in logs
            operation: Zero-argument callable producing the awaitable to run

        Returns:
            The operation's result (from the first or the retried attempt)

        Raises:
            Exception: The first non-throttling failure, or whatever the
                retry raised
        """
        try:
            return await operation()
        except Exception as e:
            if not self._policy.is_throttled(e):
                raise
            delay = self._policy.retry_delay(e)
            logger.warning(
                "Rate-limited during '{}'. Waiting {:.0f}s before retry...", label, delay
            )

        await self._sleep(delay)
        return await operation()
