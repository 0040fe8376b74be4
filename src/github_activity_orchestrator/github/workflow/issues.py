"""Issue creation and label management."""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_activity_orchestrator.github.exceptions import GitHubValidationError
from github_activity_orchestrator.logging import bind_issue, get_logger

from .content import ORCHESTRATOR_LABELS, ContentGenerator, LabelSpec
from .results import CreatedIssue

if TYPE_CHECKING:
    from github_activity_orchestrator.github.client import GitHubClient
    from github_activity_orchestrator.github.executor import RateLimitedExecutor

logger = get_logger(__name__)


class IssueService:
    """Opens the issues that start each workflow iteration.

    Usage:
        service = IssueService(client, executor, "octo", "sandbox")
        await service.ensure_labels()
        issue = await service.create_issue()
    """

    def __init__(
        self,
        client: GitHubClient,
        executor: RateLimitedExecutor,
        owner: str,
        repo: str,
        *,
        content: ContentGenerator | None = None,
        labels: tuple[LabelSpec, ...] = ORCHESTRATOR_LABELS,
    ) -> None:
        self._client = client
        self._executor = executor
        self._owner = owner
        self._repo = repo
        self._content = content or ContentGenerator()
        self._labels = labels

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self._labels]

    async def ensure_labels(self) -> list[str]:
        """Create any orchestrator label missing from the repository.

        A 422 on creation means another writer created the label first,
        which is as good as creating it ourselves.

        Returns:
            Names of the labels that were created
        """
        existing = await self._executor.call(
            "list-labels", lambda: self._client.list_labels(self._owner, self._repo)
        )
        existing_names = {label.name.lower() for label in existing}

        created: list[str] = []
        for label in self._labels:
            if label.name.lower() in existing_names:
                continue
            try:
                await self._executor.call(
                    "create-label",
                    lambda label=label: self._client.create_label(
                        self._owner,
                        self._repo,
                        name=label.name,
                        color=label.color,
                        description=label.description,
                    ),
                )
            except GitHubValidationError:
                logger.debug("Label '{}' already exists", label.name)
                continue
            logger.info("Created label '{}'", label.name)
            created.append(label.name)
        return created

    async def create_issue(self) -> CreatedIssue:
        """Open an issue with a title and body drawn from the content pools."""
        title = self._content.issue_title()
        body = self._content.issue_body()

        issue = await self._executor.call(
            "create-issue",
            lambda: self._client.create_issue(
                self._owner, self._repo, title=title, body=body, labels=self.label_names
            ),
        )

        bind_issue(self._owner, self._repo, issue.number).info("Created issue: {}", issue.title)
        return CreatedIssue(
            number=issue.number,
            title=issue.title,
            created_at=issue.created_at,
            html_url=issue.html_url,
        )
