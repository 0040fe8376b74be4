"""Workflow module - the issue-to-merge collaboration loop.

Services:
- IssueService: Issue creation and label management
- CommentService: Issue and PR comments
- PullRequestService: Branch, commit, PR, merge and branch cleanup
- MergeabilityPoller: Bounded polling of a PR's merge readiness
- MergeCoordinator: Reviewed or YOLO merge policy
- WorkflowOrchestrator: Runs N iterations and records analytics
- RepositorySeeder: One-time repository bootstrap
"""

from .comments import CommentService
from .content import ORCHESTRATOR_LABELS, ContentGenerator, LabelSpec
from .enums import IterationStatus, OutputFormat
from .issues import IssueService
from .merge import MergeCoordinator
from .mergeability import MergeabilityPoller
from .orchestrator import WorkflowOrchestrator
from .pull_requests import PullRequestService
from .results import (
    CreatedIssue,
    CreatedPullRequest,
    MergeOutcome,
    PostedComment,
    RunResult,
    WorkflowIteration,
)
from .seed import RepositorySeeder, SeedResult

__all__ = [
    "CommentService",
    "ContentGenerator",
    "CreatedIssue",
    "CreatedPullRequest",
    "IssueService",
    "IterationStatus",
    "LabelSpec",
    "MergeabilityPoller",
    "MergeCoordinator",
    "MergeOutcome",
    "ORCHESTRATOR_LABELS",
    "OutputFormat",
    "PostedComment",
    "PullRequestService",
    "RepositorySeeder",
    "RunResult",
    "SeedResult",
    "WorkflowIteration",
    "WorkflowOrchestrator",
]
