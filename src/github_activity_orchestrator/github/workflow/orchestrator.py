"""Workflow Orchestrator - run the issue-to-merge collaboration loop.

Each iteration walks one issue through its whole life:

    create issue -> comment on issue -> open PR (branch + commit) ->
    comment on PR -> [auto-merge] check mergeability -> merge

Iterations are sequential. A failure abandons the current iteration only;
the run moves on and analytics are finalized once at the end.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from github_activity_orchestrator.analytics import AnalyticsLifecycleError
from github_activity_orchestrator.logging import LogContext, get_logger

from .results import RunResult, WorkflowIteration

if TYPE_CHECKING:
    from github_activity_orchestrator.analytics import AnalyticsAccumulator
    from github_activity_orchestrator.config import Settings

    from .comments import CommentService
    from .issues import IssueService
    from .merge import MergeCoordinator
    from .pull_requests import PullRequestService

logger = get_logger(__name__)


class WorkflowOrchestrator:
    """Runs a bounded number of workflow iterations and records analytics.

    Usage:
        orchestrator = WorkflowOrchestrator(
            issues=issue_service,
            comments=comment_service,
            pull_requests=pr_service,
            merger=merge_coordinator,
            analytics=AnalyticsAccumulator(AnalyticsRepository(path)),
            settings=settings,
        )
        result = await orchestrator.run()
    """

    def __init__(
        self,
        issues: IssueService,
        comments: CommentService,
        pull_requests: PullRequestService,
        merger: MergeCoordinator,
        analytics: AnalyticsAccumulator,
        settings: Settings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            issues: Issue collaborator
            comments: Comment collaborator
            pull_requests: PR collaborator
            merger: Mergeability check and merge policy
            analytics: Accumulator owning the in-flight run record
            settings: Run caps, auto-merge flag and pauses
            sleep: Awaitable sleep, injectable for tests
        """
        self._issues = issues
        self._comments = comments
        self._pull_requests = pull_requests
        self._merger = merger
        self._analytics = analytics
        self._settings = settings
        self._delays = settings.delays
        self._sleep = sleep

    async def run(self) -> RunResult:
        """Run every iteration, then finalize the analytics record.

        Returns:
            RunResult with the persisted record and per-iteration outcomes

        Raises:
            AnalyticsLifecycleError: If the accumulator already has a run open
        """
        iterations = self._settings.iterations_per_run
        start_time = time.monotonic()

        self._analytics.start_run()
        logger.info(
            "Starting run: {} iteration(s), auto-merge={}, yolo={}",
            iterations,
            self._settings.auto_merge,
            self._settings.yolo_mode,
        )

        results: list[WorkflowIteration] = []
        try:
            for index in range(1, iterations + 1):
                if index > 1:
                    await self._sleep(self._delays.between_iterations)
                with LogContext(iteration=index):
                    results.append(await self.run_iteration(index))
        except BaseException:
            # Close the run with whatever was recorded before re-raising
            if self._analytics.in_flight:
                logger.warning("Run aborted after {} iteration(s)", len(results))
                self._analytics.end_run()
            raise

        record = self._analytics.end_run()
        result = RunResult(
            record=record,
            iterations=results,
            duration_seconds=time.monotonic() - start_time,
        )

        logger.info(
            "Run complete: {}/{} iteration(s) completed in {:.1f}s",
            result.completed,
            len(results),
            result.duration_seconds,
        )
        return result

    async def run_iteration(self, index: int) -> WorkflowIteration:
        """Run one issue-to-merge iteration.

        Remote failures mark the iteration PARTIAL_FAILURE and are not
        raised. Analytics lifecycle errors always propagate.
        """
        iteration = WorkflowIteration(index=index)
        logger.info("Iteration {}/{}", index, self._settings.iterations_per_run)

        try:
            await self._execute(iteration)
        except AnalyticsLifecycleError:
            raise
        except Exception as e:
            logger.error(
                "Iteration {} failed ({}): {}", index, type(e).__name__, e
            )
            iteration.fail(e)

        return iteration

    async def _execute(self, iteration: WorkflowIteration) -> None:
        analytics = self._analytics

        issue = await self._issues.create_issue()
        iteration.issue = issue
        analytics.record_issue_created()

        issue_comment = await self._comments.comment_on_issue(issue.number)
        iteration.issue_comment = issue_comment
        analytics.record_comment_posted()
        analytics.record_issue_to_comment(issue.created_at, issue_comment.created_at)

        await self._sleep(self._delays.after_issue_comment)

        pr = await self._pull_requests.create_pull_request(issue.number, issue.title)
        iteration.pull_request = pr
        analytics.record_pr_opened()
        if pr.co_authored:
            analytics.record_co_authored_commit()

        await self._sleep(self._delays.before_pr_comment)

        iteration.pr_comment = await self._comments.comment_on_pr(pr.number)
        analytics.record_comment_posted()

        if not self._settings.auto_merge:
            logger.info("Auto-merge disabled; leaving PR #{} open", pr.number)
            return

        await self._sleep(self._delays.before_merge_check)

        iteration.mergeable = await self._merger.check_mergeable(pr.number)
        if not iteration.mergeable:
            logger.warning("PR #{} is not mergeable, skipping merge", pr.number)
            return

        outcome = await self._merger.merge(pr.number, pr.branch)
        iteration.merge = outcome

        analytics.record_pr_merged()
        if outcome.yolo:
            analytics.record_yolo_merge()
        # Merging closes the issue through "Closes #N" in the PR body
        analytics.record_issue_closed()
        analytics.record_pr_to_merge(pr.created_at, outcome.merged_at)
