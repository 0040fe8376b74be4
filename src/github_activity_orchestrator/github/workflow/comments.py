"""Comments on issues and pull requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_activity_orchestrator.logging import bind_issue, bind_pr, get_logger

from .content import ContentGenerator
from .results import PostedComment

if TYPE_CHECKING:
    from github_activity_orchestrator.github.client import GitHubClient
    from github_activity_orchestrator.github.executor import RateLimitedExecutor

logger = get_logger(__name__)


class CommentService:
    """Posts review-style comments drawn from the curated comment pool.

    PR comments use the issues endpoint: they land in the PR conversation
    without needing a commit SHA or diff position.
    """

    def __init__(
        self,
        client: GitHubClient,
        executor: RateLimitedExecutor,
        owner: str,
        repo: str,
        *,
        content: ContentGenerator | None = None,
    ) -> None:
        self._client = client
        self._executor = executor
        self._owner = owner
        self._repo = repo
        self._content = content or ContentGenerator()

    async def comment_on_issue(self, issue_number: int) -> PostedComment:
        return await self._post(issue_number, is_pr=False)

    async def comment_on_pr(self, pr_number: int) -> PostedComment:
        return await self._post(pr_number, is_pr=True)

    async def _post(self, number: int, *, is_pr: bool) -> PostedComment:
        body = self._content.comment()
        comment = await self._executor.call(
            "comment-pr" if is_pr else "comment-issue",
            lambda: self._client.create_issue_comment(
                self._owner, self._repo, number, body=body
            ),
        )

        bound = bind_pr if is_pr else bind_issue
        bound(self._owner, self._repo, number).info("Posted comment {}", comment.id)
        return PostedComment(
            id=comment.id,
            target_number=number,
            is_pr=is_pr,
            created_at=comment.created_at,
        )
