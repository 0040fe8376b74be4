"""Merging pull requests under a reviewed or YOLO policy.

Two merge styles:
    * Reviewed (default): one review-style comment is posted on the PR,
      then the PR is merged.
    * YOLO: the PR is merged with no comment at all, so nothing but the
      merge appears in its timeline.

The policy is fixed before any remote call. The head branch is deleted
afterwards as best-effort cleanup.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from github_activity_orchestrator.config import WorkflowDelays
from github_activity_orchestrator.logging import get_logger
from github_activity_orchestrator.schemas.enums import MergeMethod

from .results import MergeOutcome

if TYPE_CHECKING:
    from .comments import CommentService
    from .mergeability import MergeabilityPoller
    from .pull_requests import PullRequestService

logger = get_logger(__name__)

REVIEWED_MESSAGE = "Merged after review."
YOLO_MESSAGE = "Merged without review (YOLO)."


class MergeCoordinator:
    """Checks mergeability and merges PRs under the configured policy.

    Usage:
        coordinator = MergeCoordinator(pr_service, comment_service, poller)
        if await coordinator.check_mergeable(pr.number):
            outcome = await coordinator.merge(pr.number, pr.branch)
    """

    def __init__(
        self,
        pull_requests: PullRequestService,
        comments: CommentService,
        poller: MergeabilityPoller,
        *,
        default_yolo: bool = False,
        merge_method: MergeMethod = MergeMethod.SQUASH,
        delays: WorkflowDelays | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            pull_requests: PR collaborator (merge, branch deletion)
            comments: Comment collaborator for the reviewed path
            poller: Mergeability poller
            default_yolo: Policy used when ``merge`` gets no explicit flag
            merge_method: GitHub merge method
            delays: Indexing pauses
            sleep: Awaitable sleep, injectable for tests
            clock: UTC clock used to stamp the merge time
        """
        self._pull_requests = pull_requests
        self._comments = comments
        self._poller = poller
        self._default_yolo = default_yolo
        self._merge_method = merge_method
        self._delays = delays or WorkflowDelays()
        self._sleep = sleep
        self._clock = clock or (lambda: datetime.now(UTC))

    async def check_mergeable(self, pr_number: int) -> bool:
        return await self._poller.is_mergeable(pr_number)

    async def merge(self, pr_number: int, branch: str, yolo: bool | None = None) -> MergeOutcome:
        """Merge a PR, commenting first unless the policy is YOLO.

        Args:
            pr_number: The PR to merge
            branch: Head branch, deleted after the merge
            yolo: Overrides the default policy for this call when not None

        Returns:
            MergeOutcome for the merged PR
        """
        use_yolo = self._default_yolo if yolo is None else yolo

        if use_yolo:
            logger.info("YOLO mode: merging PR #{} without review", pr_number)
        else:
            await self._sleep(self._delays.before_review_comment)
            await self._comments.comment_on_pr(pr_number)
            logger.info("Posted review comment on PR #{} before merge", pr_number)

        await self._sleep(self._delays.before_merge)

        result = await self._pull_requests.perform_merge(
            pr_number,
            f"merge: PR #{pr_number}",
            YOLO_MESSAGE if use_yolo else REVIEWED_MESSAGE,
            self._merge_method,
        )
        merged_at = self._clock()
        logger.info("Merged PR #{} (sha: {})", pr_number, result.sha)

        deleted = await self._pull_requests.delete_branch(branch)

        return MergeOutcome(
            pr_number=pr_number,
            merge_sha=result.sha,
            yolo=use_yolo,
            merged_at=merged_at,
            deleted_branch=branch,
            branch_deleted=deleted,
        )
