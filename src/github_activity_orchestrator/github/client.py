"""Async GitHub API client wrapper using githubkit.

This module provides a typed async interface to the GitHub REST API for
the issue, branch, commit, pull request, comment and label operations the
workflow needs. githubkit failures are translated into the exceptions in
``github.exceptions`` so callers never see transport-specific error types.
"""

from __future__ import annotations

import base64
from datetime import UTC, datetime
from typing import Any

from githubkit import GitHub
from githubkit.exception import RequestFailed

from github_activity_orchestrator.config import get_settings
from github_activity_orchestrator.logging import get_logger
from github_activity_orchestrator.schemas.enums import MergeMethod
from github_activity_orchestrator.schemas.github_api import (
    GitHubFileCommit,
    GitHubIssue,
    GitHubIssueComment,
    GitHubLabel,
    GitHubMergeResult,
    GitHubPullRequest,
    GitHubRef,
    GitHubRepository,
)

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
)

logger = get_logger(__name__)


def _dump(response: Any) -> dict[str, Any]:
    """Dump a githubkit response body using GitHub's own field names."""
    data: dict[str, Any] = response.parsed_data.model_dump(by_alias=True)
    return data


class GitHubClient:
    """Async GitHub API client for the activity workflow.

    Usage:
        async with GitHubClient() as client:
            issue = await client.create_issue("octo", "sandbox", title="...", body="...")
            print(issue.number)

    Or without context manager:
        client = GitHubClient()
        repo = await client.get_repository("octo", "sandbox")
        await client.close()
    """

    def __init__(self, token: str | None = None) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub PAT. If not provided, uses GITHUB_TOKEN from settings.

        Raises:
            GitHubAuthenticationError: If no token is available.
        """
        self._token = token or get_settings().github_token
        if not self._token:
            raise GitHubAuthenticationError(
                "GitHub token required. Set GITHUB_TOKEN environment variable."
            )
        self._client: GitHub[Any] | None = None

    @property
    def _github(self) -> GitHub[Any]:
        """Get or create the githubkit client instance."""
        if self._client is None:
            self._client = GitHub(self._token)
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    # -------------------------------------------------------------------------
    # Rate Limit Info
    # -------------------------------------------------------------------------
    async def get_rate_limit(self) -> dict[str, int | datetime]:
        """Get current core rate limit status.

        Returns:
            Dict with 'limit', 'remaining', 'reset' (datetime), 'used' keys.
        """
        try:
            resp = await self._github.rest.rate_limit.async_get()
        except RequestFailed as e:
            raise self._handle_error(e) from e
        core = resp.parsed_data.resources.core
        return {
            "limit": core.limit,
            "remaining": core.remaining,
            "used": core.used,
            "reset": datetime.fromtimestamp(core.reset, tz=UTC),
        }

    # -------------------------------------------------------------------------
    # Repository, Refs & Contents
    # -------------------------------------------------------------------------
    async def get_repository(self, owner: str, repo: str) -> GitHubRepository:
        """Get repository metadata (default branch, caller permissions)."""
        try:
            resp = await self._github.rest.repos.async_get(owner=owner, repo=repo)
            return GitHubRepository.model_validate(_dump(resp))
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def get_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        """Get the SHA at the tip of a branch."""
        try:
            resp = await self._github.rest.git.async_get_ref(
                owner=owner, repo=repo, ref=f"heads/{branch}"
            )
            return GitHubRef.model_validate(_dump(resp)).sha
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def create_branch(self, owner: str, repo: str, branch: str, sha: str) -> GitHubRef:
        """Create ``refs/heads/<branch>`` pointing at ``sha``.

        Raises:
            GitHubValidationError: If the branch already exists (422)
        """
        try:
            resp = await self._github.rest.git.async_create_ref(
                owner=owner, repo=repo, ref=f"refs/heads/{branch}", sha=sha
            )
            return GitHubRef.model_validate(_dump(resp))
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def delete_branch(self, owner: str, repo: str, branch: str) -> None:
        """Delete ``refs/heads/<branch>``."""
        try:
            await self._github.rest.git.async_delete_ref(
                owner=owner, repo=repo, ref=f"heads/{branch}"
            )
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def get_file_sha(self, owner: str, repo: str, path: str, ref: str) -> str | None:
        """Get the blob SHA of a file, or None if it does not exist on ``ref``."""
        try:
            resp = await self._github.rest.repos.async_get_content(
                owner=owner, repo=repo, path=path, ref=ref
            )
        except RequestFailed as e:
            if e.response.status_code == 404:
                return None
            raise self._handle_error(e) from e

        # Directories come back as a list of entries
        if isinstance(resp.parsed_data, list):
            return None
        data = _dump(resp)
        if data.get("type") != "file":
            return None
        sha: str | None = data.get("sha")
        return sha

    async def create_or_update_file(
        self,
        owner: str,
        repo: str,
        *,
        path: str,
        content: str,
        message: str,
        branch: str,
        sha: str | None = None,
    ) -> GitHubFileCommit:
        """Create or update a file through the contents API.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path inside the repository
            content: UTF-8 text content (encoded here)
            message: Commit message
            branch: Branch to commit to
            sha: Existing blob SHA when updating a file

        Returns:
            The commit that was created
        """
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha
        try:
            resp = await self._github.rest.repos.async_create_or_update_file_contents(
                owner=owner, repo=repo, path=path, **payload
            )
            return GitHubFileCommit.model_validate(_dump(resp).get("commit") or {})
        except RequestFailed as e:
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Labels & Issues
    # -------------------------------------------------------------------------
    async def list_labels(self, owner: str, repo: str) -> list[GitHubLabel]:
        """List every label defined on the repository."""
        try:
            labels: list[GitHubLabel] = []
            label_data: Any
            async for label_data in self._github.paginate(
                self._github.rest.issues.async_list_labels_for_repo,
                owner=owner,
                repo=repo,
                per_page=100,
            ):
                labels.append(GitHubLabel.model_validate(label_data.model_dump(by_alias=True)))
            return labels
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def create_label(
        self,
        owner: str,
        repo: str,
        *,
        name: str,
        color: str,
        description: str | None = None,
    ) -> GitHubLabel:
        """Create a label.

        Raises:
            GitHubValidationError: If the label already exists (422)
        """
        try:
            resp = await self._github.rest.issues.async_create_label(
                owner=owner, repo=repo, name=name, color=color, description=description or ""
            )
            return GitHubLabel.model_validate(_dump(resp))
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def create_issue(
        self,
        owner: str,
        repo: str,
        *,
        title: str,
        body: str,
        labels: list[str] | None = None,
    ) -> GitHubIssue:
        """Open an issue."""
        try:
            resp = await self._github.rest.issues.async_create(
                owner=owner, repo=repo, title=title, body=body, labels=labels or []
            )
            return GitHubIssue.model_validate(_dump(resp))
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def create_issue_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        *,
        body: str,
    ) -> GitHubIssueComment:
        """Comment on an issue or on a PR's conversation (PRs share the issue number space)."""
        try:
            resp = await self._github.rest.issues.async_create_comment(
                owner=owner, repo=repo, issue_number=issue_number, body=body
            )
            return GitHubIssueComment.model_validate(_dump(resp))
        except RequestFailed as e:
            if e.response.status_code == 404:
                raise GitHubNotFoundError(
                    f"Issue #{issue_number} not found in {owner}/{repo}", status_code=404
                ) from e
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Pull Requests
    # -------------------------------------------------------------------------
    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        *,
        title: str,
        head: str,
        base: str,
        body: str,
    ) -> GitHubPullRequest:
        """Open a pull request from ``head`` into ``base``."""
        try:
            resp = await self._github.rest.pulls.async_create(
                owner=owner, repo=repo, title=title, head=head, base=base, body=body
            )
            return GitHubPullRequest.model_validate(_dump(resp))
        except RequestFailed as e:
            raise self._handle_error(e) from e

    async def get_pull_request(self, owner: str, repo: str, number: int) -> GitHubPullRequest:
        """Get a single pull request, including its ``mergeable`` flag.

        Raises:
            GitHubNotFoundError: If PR doesn't exist
        """
        try:
            resp = await self._github.rest.pulls.async_get(
                owner=owner, repo=repo, pull_number=number
            )
            return GitHubPullRequest.model_validate(_dump(resp))
        except RequestFailed as e:
            if e.response.status_code == 404:
                raise GitHubNotFoundError(
                    f"PR #{number} not found in {owner}/{repo}", status_code=404
                ) from e
            raise self._handle_error(e) from e

    async def merge_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
        *,
        commit_title: str,
        commit_message: str,
        merge_method: MergeMethod = MergeMethod.SQUASH,
    ) -> GitHubMergeResult:
        """Merge a pull request."""
        try:
            resp = await self._github.rest.pulls.async_merge(
                owner=owner,
                repo=repo,
                pull_number=number,
                merge_method=merge_method.value,
                commit_title=commit_title,
                commit_message=commit_message,
            )
            return GitHubMergeResult.model_validate(_dump(resp))
        except RequestFailed as e:
            raise self._handle_error(e) from e

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_error(self, error: RequestFailed) -> GitHubClientError:
        """Convert githubkit exceptions to our custom exceptions."""
        status = error.response.status_code
        headers = error.response.headers
        retry_after = _parse_retry_after(headers.get("retry-after"))
        reset_at = _parse_reset(headers.get("x-ratelimit-reset"))

        if status == 401:
            return GitHubAuthenticationError("Invalid GitHub token", status_code=status)
        if status == 429 or (
            status == 403 and (retry_after is not None or headers.get("x-ratelimit-remaining") == "0")
        ):
            return GitHubRateLimitError(
                f"GitHub rate limit exceeded ({status})",
                status_code=status,
                retry_after=retry_after,
                reset_at=reset_at,
            )
        if status == 403:
            return GitHubClientError(f"Access forbidden: {error}", status_code=status)
        if status == 404:
            return GitHubNotFoundError(str(error), status_code=status)
        if status == 422:
            return GitHubValidationError(f"Validation failed: {error}", status_code=status)
        return GitHubClientError(f"GitHub API error ({status}): {error}", status_code=status)


def _parse_retry_after(raw: str | None) -> float | None:
    """Parse a Retry-After header given in seconds."""
    if raw is None:
        return None
    try:
        seconds = float(raw)
    except ValueError:
        logger.debug("Ignoring non-numeric Retry-After header: {}", raw)
        return None
    return max(seconds, 0.0)


def _parse_reset(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromtimestamp(int(raw), tz=UTC)
    except ValueError:
        return None
