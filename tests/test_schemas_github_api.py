"""Tests for GitHub API Pydantic schemas."""

from github_activity_orchestrator.schemas import MergeState
from github_activity_orchestrator.schemas.github_api import (
    GitHubFileCommit,
    GitHubIssue,
    GitHubIssueComment,
    GitHubMergeResult,
    GitHubPullRequest,
    GitHubRef,
    GitHubRepository,
)

from .conftest import MAR_01_COMMENT, MAR_01_ISSUE, MAR_01_PR
from .fixtures.github_responses import (
    GITHUB_COMMENT_RESPONSE,
    GITHUB_FILE_COMMIT_RESPONSE,
    GITHUB_ISSUE_RESPONSE,
    GITHUB_MERGE_RESPONSE,
    GITHUB_PR_RESPONSE,
    GITHUB_REF_RESPONSE,
    GITHUB_REPOSITORY_RESPONSE,
)


class TestGitHubRepository:
    """Tests for GitHubRepository schema."""

    def test_repository_parse(self):
        """Extra response fields are ignored; permissions are kept."""
        repo = GitHubRepository.model_validate(GITHUB_REPOSITORY_RESPONSE)

        assert repo.full_name == "octo/sandbox"
        assert repo.default_branch == "main"
        assert repo.visibility == "public"
        assert repo.permissions is not None
        assert repo.permissions.push is True

    def test_repository_without_permissions(self):
        """Unauthenticated responses omit permissions."""
        repo = GitHubRepository(full_name="octo/sandbox", default_branch="main")

        assert repo.permissions is None


class TestGitHubRef:
    """Tests for GitHubRef schema."""

    def test_ref_parse_uses_object_alias(self):
        """The API's ``object`` key maps onto the sha property."""
        ref = GitHubRef.model_validate(GITHUB_REF_RESPONSE)

        assert ref.ref == "refs/heads/main"
        assert ref.sha == "aa218f56b14c9653891f9e74264a383fa43fefbd"


class TestGitHubIssue:
    """Tests for issue and comment schemas."""

    def test_issue_parse(self):
        """Issue timestamps are parsed as aware datetimes."""
        issue = GitHubIssue.model_validate(GITHUB_ISSUE_RESPONSE)

        assert issue.number == 7
        assert issue.created_at == MAR_01_ISSUE
        assert [label.name for label in issue.labels] == ["orchestrator", "automated"]

    def test_comment_parse(self):
        """Comment id and timestamp are kept."""
        comment = GitHubIssueComment.model_validate(GITHUB_COMMENT_RESPONSE)

        assert comment.id == 9001
        assert comment.created_at == MAR_01_COMMENT


class TestGitHubPullRequest:
    """Tests for GitHubPullRequest schema."""

    def test_pr_parse(self):
        """Head/base refs and creation time are parsed."""
        pr = GitHubPullRequest.model_validate(GITHUB_PR_RESPONSE)

        assert pr.number == 8
        assert pr.head.ref == "orchestrator/refactor-utility-functions-abc123"
        assert pr.base.ref == "main"
        assert pr.created_at == MAR_01_PR
        assert pr.merged is False

    def test_merge_state_unknown_while_computing(self):
        """``mergeable: null`` maps to UNKNOWN."""
        pr = GitHubPullRequest.model_validate(GITHUB_PR_RESPONSE)

        assert pr.mergeable is None
        assert pr.merge_state == MergeState.UNKNOWN

    def test_merge_state_resolved(self):
        """True/False map to MERGEABLE/NOT_MERGEABLE."""
        mergeable = GitHubPullRequest.model_validate({**GITHUB_PR_RESPONSE, "mergeable": True})
        conflicted = GitHubPullRequest.model_validate({**GITHUB_PR_RESPONSE, "mergeable": False})

        assert mergeable.merge_state == MergeState.MERGEABLE
        assert conflicted.merge_state == MergeState.NOT_MERGEABLE


class TestWriteResponses:
    """Tests for merge and contents API responses."""

    def test_merge_result_parse(self):
        """Merge response carries the merge commit sha."""
        result = GitHubMergeResult.model_validate(GITHUB_MERGE_RESPONSE)

        assert result.merged is True
        assert result.sha == "6dcb09b5b57875f334f61aebed695e2e4193db5e"

    def test_file_commit_parse(self):
        """The ``commit`` sub-object of a contents write parses on its own."""
        commit = GitHubFileCommit.model_validate(GITHUB_FILE_COMMIT_RESPONSE["commit"])

        assert commit.sha == "7638417db6d59f3c431d3e1f261cc637155684cd"
