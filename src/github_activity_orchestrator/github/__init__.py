"""GitHub API client module.

This module provides:
- GitHubClient: Async GitHub API client
- RateLimitedExecutor: Single-retry wrapper for throttled calls
- Workflow: issue, comment, PR and merge services plus the orchestrator
"""

from .client import GitHubClient
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubValidationError,
)
from .executor import GitHubThrottlePolicy, RateLimitedExecutor, ThrottlePolicy
from .workflow import (
    CommentService,
    IssueService,
    MergeabilityPoller,
    MergeCoordinator,
    OutputFormat,
    PullRequestService,
    RepositorySeeder,
    RunResult,
    WorkflowOrchestrator,
)

__all__ = [
    # Client
    "GitHubClient",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubValidationError",
    # Throttling
    "GitHubThrottlePolicy",
    "RateLimitedExecutor",
    "ThrottlePolicy",
    # Workflow
    "CommentService",
    "IssueService",
    "MergeabilityPoller",
    "MergeCoordinator",
    "OutputFormat",
    "PullRequestService",
    "RepositorySeeder",
    "RunResult",
    "WorkflowOrchestrator",
]
