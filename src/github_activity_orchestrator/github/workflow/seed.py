"""One-time bootstrap of a target repository.

Optional: the orchestrator creates missing labels on its own. Seeding
first confirms the token can push before the main loop runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from github_activity_orchestrator.github.exceptions import (
    GitHubAuthenticationError,
    GitHubValidationError,
)
from github_activity_orchestrator.logging import get_logger

from .content import GENERATED_DIR

if TYPE_CHECKING:
    from github_activity_orchestrator.github.client import GitHubClient
    from github_activity_orchestrator.github.executor import RateLimitedExecutor

    from .issues import IssueService

logger = get_logger(__name__)

PLACEHOLDER_PATH = f"{GENERATED_DIR}/.gitkeep"
PLACEHOLDER_CONTENT = (
    "# This directory is managed by the GitHub Activity Orchestrator.\n"
    "# Generated files appear here as part of automated workflows.\n"
)


@dataclass
class SeedResult:
    """What the seeder found and changed."""

    full_name: str
    default_branch: str
    visibility: str | None = None
    labels_created: list[str] = field(default_factory=list)
    placeholder_created: bool = False
    """False if the placeholder already existed."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "repository": self.full_name,
            "default_branch": self.default_branch,
            "visibility": self.visibility,
            "labels_created": self.labels_created,
            "placeholder_created": self.placeholder_created,
        }


class RepositorySeeder:
    """Verifies access and prepares labels and the generated directory.

    Usage:
        seeder = RepositorySeeder(client, executor, issue_service, "octo", "sandbox")
        result = await seeder.seed()
    """

    def __init__(
        self,
        client: GitHubClient,
        executor: RateLimitedExecutor,
        issues: IssueService,
        owner: str,
        repo: str,
    ) -> None:
        self._client = client
        self._executor = executor
        self._issues = issues
        self._owner = owner
        self._repo = repo

    async def seed(self) -> SeedResult:
        """Run every seeding step.

        Raises:
            GitHubAuthenticationError: If the token cannot push to the repository
        """
        repository = await self._executor.call(
            "get-repo", lambda: self._client.get_repository(self._owner, self._repo)
        )
        permissions = repository.permissions
        logger.info(
            "Repository {} (default branch {}, visibility {})",
            repository.full_name,
            repository.default_branch,
            repository.visibility,
        )

        if permissions is None or not permissions.push:
            raise GitHubAuthenticationError(
                f"Token does not have push access to {repository.full_name}. "
                "Grant the 'Contents: write' permission and try again."
            )

        result = SeedResult(
            full_name=repository.full_name,
            default_branch=repository.default_branch,
            visibility=repository.visibility,
        )

        result.labels_created = await self._issues.ensure_labels()
        result.placeholder_created = await self._commit_placeholder(repository.default_branch)
        return result

    async def _commit_placeholder(self, branch: str) -> bool:
        try:
            await self._executor.call(
                "seed-placeholder",
                lambda: self._client.create_or_update_file(
                    self._owner,
                    self._repo,
                    path=PLACEHOLDER_PATH,
                    content=PLACEHOLDER_CONTENT,
                    message=f"chore: initialise {GENERATED_DIR} directory",
                    branch=branch,
                ),
            )
        except GitHubValidationError:
            logger.info("Placeholder {} already exists, skipping", PLACEHOLDER_PATH)
            return False
        logger.info("Committed placeholder {}", PLACEHOLDER_PATH)
        return True
