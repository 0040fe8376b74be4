"""Pydantic schemas for parsing GitHub API responses.

These schemas map directly to the GitHub REST API response structure and
keep only the fields the workflow reads.
See: https://docs.github.com/en/rest
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import MergeState


class GitHubUser(BaseModel):
    """GitHub user object from API responses."""

    login: str = Field(description="GitHub username")
    id: int = Field(description="GitHub user ID")
    type: str = Field(default="User", description="User type")


class GitHubLabel(BaseModel):
    """GitHub label object from API responses."""

    id: int = Field(description="Label ID")
    name: str = Field(description="Label name")
    color: str = Field(description="Label color (hex without #)")
    description: str | None = Field(default=None, description="Label description")


class GitHubPermissions(BaseModel):
    """Permissions of the authenticated user on a repository."""

    admin: bool = False
    push: bool = False
    pull: bool = False


class GitHubRepository(BaseModel):
    """Repository object.

    Maps to: GET /repos/{owner}/{repo}
    """

    full_name: str = Field(description="owner/name")
    default_branch: str = Field(description="Default branch name")
    visibility: str | None = Field(default=None, description="public, private or internal")
    permissions: GitHubPermissions | None = Field(
        default=None, description="Caller's permissions (authenticated requests only)"
    )


class GitHubRefObject(BaseModel):
    """Object a git reference points at."""

    sha: str = Field(description="Commit SHA")
    type: str = Field(default="commit", description="Object type")


class GitHubRef(BaseModel):
    """Git reference.

    Maps to: GET /repos/{owner}/{repo}/git/ref/{ref}
    """

    model_config = ConfigDict(populate_by_name=True)

    ref: str = Field(description="Fully qualified ref, e.g. refs/heads/main")
    object_: GitHubRefObject = Field(alias="object", description="Target object")

    @property
    def sha(self) -> str:
        return self.object_.sha


class GitHubIssue(BaseModel):
    """Issue object.

    Maps to: POST /repos/{owner}/{repo}/issues
    """

    number: int = Field(description="Issue number")
    title: str = Field(description="Issue title")
    html_url: str = Field(description="GitHub issue URL")
    state: str = Field(default="open", description="Issue state")
    created_at: datetime = Field(description="When the issue was created")
    labels: list[GitHubLabel] = Field(default_factory=list, description="Issue labels")


class GitHubIssueComment(BaseModel):
    """Issue (or PR conversation) comment object."""

    id: int = Field(description="Comment ID")
    html_url: str = Field(default="", description="GitHub comment URL")
    body: str | None = Field(default=None, description="Comment text")
    created_at: datetime = Field(description="When the comment was created")


class GitHubBranchRef(BaseModel):
    """Head/base side of a pull request."""

    ref: str = Field(description="Branch name")
    sha: str = Field(description="Tip commit SHA")


class GitHubPullRequest(BaseModel):
    """Pull request object.

    Maps to: GET /repos/{owner}/{repo}/pulls/{number}
    """

    number: int = Field(description="PR number")
    html_url: str = Field(description="GitHub PR URL")
    state: str = Field(description="PR state (open, closed)")
    title: str = Field(description="PR title")
    body: str | None = Field(default=None, description="PR description")
    head: GitHubBranchRef = Field(description="Source branch")
    base: GitHubBranchRef = Field(description="Target branch")
    created_at: datetime = Field(description="When PR was created")
    merged_at: datetime | None = Field(default=None, description="When PR was merged")
    merged: bool = Field(default=False, description="Whether PR was merged")
    mergeable: bool | None = Field(
        default=None,
        description="Merge readiness; null while GitHub is still computing it",
    )
    mergeable_state: str | None = Field(default=None, description="clean, dirty, blocked, ...")

    @property
    def merge_state(self) -> MergeState:
        return MergeState.from_api(self.mergeable)


class GitHubMergeResult(BaseModel):
    """Merge response.

    Maps to: PUT /repos/{owner}/{repo}/pulls/{number}/merge
    """

    sha: str = Field(description="SHA of the merge commit")
    merged: bool = Field(description="Whether the merge happened")
    message: str = Field(default="", description="Server message")


class GitHubFileCommit(BaseModel):
    """Commit created by the contents API."""

    sha: str | None = Field(default=None, description="Commit SHA")
    html_url: str | None = Field(default=None, description="Commit URL")
