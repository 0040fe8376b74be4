"""Pull request lifecycle: branch, commit, open, inspect, merge, clean up.

Workflow for a new PR:
    1. Branch off the default branch's tip.
    2. Commit one real, non-empty file (optionally co-authored).
    3. Open a PR whose body says ``Closes #<issue>`` so the merge closes
       the issue.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_activity_orchestrator.logging import bind_pr, get_logger
from github_activity_orchestrator.schemas.enums import MergeMethod, MergeState
from github_activity_orchestrator.schemas.github_api import GitHubFileCommit, GitHubMergeResult

from .content import ContentGenerator, co_author_trailer, generated_file_path, slugify
from .results import CreatedPullRequest

if TYPE_CHECKING:
    from github_activity_orchestrator.github.client import GitHubClient
    from github_activity_orchestrator.github.executor import RateLimitedExecutor

logger = get_logger(__name__)


class PullRequestService:
    """Creates, inspects and merges the workflow's pull requests.

    Usage:
        service = PullRequestService(client, executor, "octo", "sandbox")
        pr = await service.create_pull_request(issue.number, issue.title)
        state = await service.check_merge_state(pr.number)
    """

    def __init__(
        self,
        client: GitHubClient,
        executor: RateLimitedExecutor,
        owner: str,
        repo: str,
        *,
        branch_prefix: str = "orchestrator/",
        co_author_name: str = "",
        co_author_email: str = "",
        content: ContentGenerator | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: GitHub API client
            executor: Rate-limited executor every call goes through
            owner: Repository owner
            repo: Repository name
            branch_prefix: Prefix for created branch names
            co_author_name: Co-author for the commit trailer (optional)
            co_author_email: Co-author email for the commit trailer (optional)
            content: Content pools (random by default)
        """
        self._client = client
        self._executor = executor
        self._owner = owner
        self._repo = repo
        self._branch_prefix = branch_prefix
        self._trailer = co_author_trailer(co_author_name, co_author_email)
        self._content = content or ContentGenerator()

    async def create_pull_request(self, issue_number: int, issue_title: str) -> CreatedPullRequest:
        """Branch, commit a generated file and open a PR that closes the issue.

        Args:
            issue_number: The issue this PR will reference and close
            issue_title: Used to derive the branch name, file name and PR title

        Returns:
            CreatedPullRequest describing the opened PR
        """
        slug = slugify(issue_title)
        branch = f"{self._branch_prefix}{slug}-{self._content.short_id()}"

        repository = await self._executor.call(
            "get-repo", lambda: self._client.get_repository(self._owner, self._repo)
        )
        base_branch = repository.default_branch
        base_sha = await self._executor.call(
            "get-ref",
            lambda: self._client.get_branch_sha(self._owner, self._repo, base_branch),
        )

        await self._executor.call(
            "create-branch",
            lambda: self._client.create_branch(self._owner, self._repo, branch, base_sha),
        )
        logger.info("Created branch {}", branch)

        path = generated_file_path(f"{slug}-{self._content.short_id()}")
        message = f"feat: {issue_title} (#{issue_number}){self._trailer}"
        commit = await self._commit_file(
            branch=branch, path=path, content=self._content.file_content(), message=message
        )
        logger.info("Committed {} on {} ({})", path, branch, commit.sha or "unknown")

        body = f"{self._content.pr_description()}\n\nCloses #{issue_number}"
        pr = await self._executor.call(
            "create-pr",
            lambda: self._client.create_pull_request(
                self._owner,
                self._repo,
                title=f"feat: {issue_title}",
                head=branch,
                base=base_branch,
                body=body,
            ),
        )

        logger.info("Opened PR #{} on branch {} -> closes #{}", pr.number, branch, issue_number)
        return CreatedPullRequest(
            number=pr.number,
            branch=branch,
            created_at=pr.created_at,
            closes_issue=issue_number,
            html_url=pr.html_url,
            commit_sha=commit.sha,
            co_authored=bool(self._trailer),
        )

    async def _commit_file(
        self, *, branch: str, path: str, content: str, message: str
    ) -> GitHubFileCommit:
        """Upsert a file by path.

        The existing blob SHA is looked up inside the retried operation, so
        a retry after a throttled write updates rather than conflicts.
        """

        async def upsert() -> GitHubFileCommit:
            sha = await self._client.get_file_sha(self._owner, self._repo, path, branch)
            return await self._client.create_or_update_file(
                self._owner,
                self._repo,
                path=path,
                content=content,
                message=message,
                branch=branch,
                sha=sha,
            )

        return await self._executor.call("commit-file", upsert)

    async def check_merge_state(self, pr_number: int) -> MergeState:
        """Read the PR's merge readiness once (no polling)."""
        pr = await self._executor.call(
            "check-mergeable",
            lambda: self._client.get_pull_request(self._owner, self._repo, pr_number),
        )
        bind_pr(self._owner, self._repo, pr_number).debug(
            "mergeable={} mergeable_state={}", pr.mergeable, pr.mergeable_state
        )
        return pr.merge_state

    async def perform_merge(
        self,
        pr_number: int,
        title: str,
        message: str,
        method: MergeMethod = MergeMethod.SQUASH,
    ) -> GitHubMergeResult:
        return await self._executor.call(
            "merge-pr",
            lambda: self._client.merge_pull_request(
                self._owner,
                self._repo,
                pr_number,
                commit_title=title,
                commit_message=message,
                merge_method=method,
            ),
        )

    async def delete_branch(self, branch: str) -> bool:
        """Delete a branch, best-effort.

        Returns:
            True if deleted, False if the deletion failed (logged, not raised)
        """
        try:
            await self._executor.call(
                "delete-branch",
                lambda: self._client.delete_branch(self._owner, self._repo, branch),
            )
        except Exception as e:
            logger.warning("Could not delete branch {} (may already be gone): {}", branch, e)
            return False
        logger.debug("Deleted branch {}", branch)
        return True
