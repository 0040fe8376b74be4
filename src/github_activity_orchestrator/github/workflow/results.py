"""Result objects for workflow operations.

Structured results provide consistent interfaces for the orchestrator,
analytics recording and CLI output.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from github_activity_orchestrator.schemas.analytics import RunRecord

from .enums import IterationStatus


@dataclass(frozen=True)
class CreatedIssue:
    """An issue opened by the workflow."""

    number: int
    title: str
    created_at: datetime
    html_url: str = ""


@dataclass(frozen=True)
class PostedComment:
    """A comment posted on an issue or a PR."""

    id: int
    target_number: int
    is_pr: bool
    created_at: datetime


@dataclass(frozen=True)
class CreatedPullRequest:
    """A PR opened from a fresh branch with one generated commit."""

    number: int
    branch: str
    created_at: datetime
    closes_issue: int
    html_url: str = ""
    commit_sha: str | None = None
    co_authored: bool = False
    """True if the commit carries a Co-authored-by trailer."""


@dataclass(frozen=True)
class MergeOutcome:
    """Result of a successful merge."""

    pr_number: int
    merge_sha: str
    yolo: bool
    """True if merged without a review comment."""

    merged_at: datetime
    deleted_branch: str
    """Head branch targeted for cleanup after the merge."""

    branch_deleted: bool = True
    """False if the best-effort branch deletion failed."""


@dataclass
class WorkflowIteration:
    """Correlates the artifacts of one iteration.

    Fields fill in as steps complete, so a failed iteration shows how far
    it got.
    """

    index: int
    """1-based iteration number within the run."""

    issue: CreatedIssue | None = None
    issue_comment: PostedComment | None = None
    pull_request: CreatedPullRequest | None = None
    pr_comment: PostedComment | None = None
    mergeable: bool | None = None
    """None if mergeability was never checked (auto-merge off or earlier failure)."""

    merge: MergeOutcome | None = None
    status: IterationStatus = IterationStatus.COMPLETED
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.status == IterationStatus.COMPLETED

    @property
    def merged(self) -> bool:
        return self.merge is not None

    def fail(self, error: Exception) -> None:
        self.status = IterationStatus.PARTIAL_FAILURE
        self.error = error

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "iteration": self.index,
            "status": self.status.value,
            "issue_number": self.issue.number if self.issue else None,
            "pr_number": self.pull_request.number if self.pull_request else None,
            "branch": self.pull_request.branch if self.pull_request else None,
            "mergeable": self.mergeable,
            "merged": self.merged,
            "yolo": self.merge.yolo if self.merge else None,
        }
        if self.error:
            result["error"] = str(self.error)
            result["error_type"] = type(self.error).__name__
        return result


@dataclass
class RunResult:
    """Outcome of one orchestrator run."""

    record: RunRecord
    """The finalized analytics record for this run."""

    iterations: list[WorkflowIteration] = field(default_factory=list)

    duration_seconds: float = 0.0

    @property
    def completed(self) -> int:
        return sum(1 for it in self.iterations if it.success)

    @property
    def failed(self) -> int:
        return sum(1 for it in self.iterations if not it.success)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "iterations": len(self.iterations),
                "completed": self.completed,
                "failed": self.failed,
                "duration_seconds": round(self.duration_seconds, 2),
            },
            "record": self.record.model_dump(mode="json"),
            "iterations": [it.to_dict() for it in self.iterations],
        }
