"""Pydantic schemas for GitHub Activity Orchestrator.

This module provides GitHub API response models and the analytics
persistence models.
"""

from .analytics import ANALYTICS_SCHEMA_VERSION, AnalyticsStore, RunRecord
from .enums import MergeMethod, MergeState
from .github_api import (
    GitHubBranchRef,
    GitHubFileCommit,
    GitHubIssue,
    GitHubIssueComment,
    GitHubLabel,
    GitHubMergeResult,
    GitHubPermissions,
    GitHubPullRequest,
    GitHubRef,
    GitHubRefObject,
    GitHubRepository,
    GitHubUser,
)

__all__ = [
    # Analytics
    "ANALYTICS_SCHEMA_VERSION",
    "AnalyticsStore",
    "RunRecord",
    # Enums
    "MergeMethod",
    "MergeState",
    # GitHub API
    "GitHubBranchRef",
    "GitHubFileCommit",
    "GitHubIssue",
    "GitHubIssueComment",
    "GitHubLabel",
    "GitHubMergeResult",
    "GitHubPermissions",
    "GitHubPullRequest",
    "GitHubRef",
    "GitHubRefObject",
    "GitHubRepository",
    "GitHubUser",
]
