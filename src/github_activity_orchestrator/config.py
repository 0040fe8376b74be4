"""Configuration settings for GitHub Activity Orchestrator."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitConfig(BaseModel):
    """Configuration for throttling detection and recovery.

    Controls which HTTP statuses count as a throttling signal and how
    long to wait when the server does not say.
    """

    default_wait_seconds: float = Field(
        default=60.0,
        ge=0.0,
        description="Wait before the single retry when no Retry-After hint is present",
    )
    throttle_status_codes: list[int] = Field(
        default_factory=lambda: [403, 429],
        description="HTTP statuses treated as a throttling signal",
    )


class MergeabilityConfig(BaseModel):
    """Configuration for polling a PR's merge readiness.

    GitHub computes mergeability lazily, so the first reads of a new PR
    usually come back as unknown.
    """

    max_attempts: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Maximum polls before giving up (unknown resolves to not mergeable)",
    )
    poll_interval_seconds: float = Field(
        default=3.0,
        ge=0.0,
        description="Seconds to wait between polls",
    )


class WorkflowDelays(BaseModel):
    """Fixed pauses that let GitHub index freshly created resources.

    These guard against read-after-write lag. They are not rate limiting.
    """

    after_issue_comment: float = Field(
        default=2.0, ge=0.0, description="After the issue comment, before opening the PR"
    )
    before_pr_comment: float = Field(
        default=1.5, ge=0.0, description="After opening the PR, before commenting on it"
    )
    before_merge_check: float = Field(
        default=3.0, ge=0.0, description="Before the first mergeability poll"
    )
    between_iterations: float = Field(
        default=3.0, ge=0.0, description="Between two workflow iterations"
    )
    before_review_comment: float = Field(
        default=1.5, ge=0.0, description="Before the reviewed-merge comment"
    )
    before_merge: float = Field(
        default=1.0, ge=0.0, description="Before the merge call"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Controls file logging, rotation, and output format.
    """

    log_file: str | None = Field(
        default=None,
        description="Optional path for file logging (enables rotation)",
    )
    rotation: str = Field(
        default="10 MB",
        description="When to rotate log file (e.g., '10 MB', '1 day')",
    )
    retention: str = Field(
        default="7 days",
        description="How long to keep rotated logs",
    )
    serialize: bool = Field(
        default=False,
        description="If True, output JSON format to file",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # GitHub API
    # --------------------------------------------------------------------------
    github_token: str = Field(
        default="",
        description="GitHub personal access token (or GITHUB_TOKEN in Actions)",
    )
    github_owner: str = Field(
        default="",
        description="Owner (user or org) of the target repository",
    )
    github_repo: str = Field(
        default="",
        description="Name of the target repository",
    )
    github_repository: str = Field(
        default="",
        description="owner/name fallback, as exported by GitHub Actions",
    )

    # --------------------------------------------------------------------------
    # Workflow
    # --------------------------------------------------------------------------
    co_author_name: str = Field(default="", description="Co-author name for commit trailers")
    co_author_email: str = Field(default="", description="Co-author email for commit trailers")
    branch_prefix: str = Field(
        default="orchestrator/",
        description="Prefix for orchestrator-created branches",
    )
    max_issues_per_run: int = Field(default=1, ge=1, description="Max issues per run")
    max_prs_per_run: int = Field(default=1, ge=1, description="Max pull requests per run")
    auto_merge: bool = Field(default=True, description="Merge PRs after opening them")
    yolo_mode: bool = Field(default=False, description="Merge without a review comment")

    # --------------------------------------------------------------------------
    # Analytics
    # --------------------------------------------------------------------------
    analytics_path: str = Field(
        default="data/analytics.json",
        description="JSON file holding every recorded run",
    )
    report_path: str = Field(
        default="analytics.md",
        description="Markdown report regenerated after every run",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # --------------------------------------------------------------------------
    # Policies
    # --------------------------------------------------------------------------
    rate_limit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Throttling detection and retry configuration",
    )
    mergeability: MergeabilityConfig = Field(
        default_factory=MergeabilityConfig,
        description="Mergeability polling configuration",
    )
    delays: WorkflowDelays = Field(
        default_factory=WorkflowDelays,
        description="Indexing-lag pauses between workflow steps",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration (file output, rotation)",
    )

    @property
    def iterations_per_run(self) -> int:
        """Each iteration opens one issue and at most one PR, so both caps bind."""
        return min(self.max_issues_per_run, self.max_prs_per_run)

    @property
    def co_author_configured(self) -> bool:
        """Whether commits should carry a Co-authored-by trailer."""
        return bool(self.co_author_name.strip() and self.co_author_email.strip())

    def target_repo(self) -> tuple[str, str]:
        """Resolve the (owner, repo) pair to operate on.

        GITHUB_OWNER/GITHUB_REPO win; GITHUB_REPOSITORY is the fallback.

        Raises:
            ValueError: If no target repository is configured
        """
        if self.github_owner and self.github_repo:
            return self.github_owner, self.github_repo
        if self.github_repository:
            owner, sep, name = self.github_repository.strip().partition("/")
            if sep and owner and name and "/" not in name:
                return owner, name
            raise ValueError(
                f"GITHUB_REPOSITORY must be in owner/name format, got '{self.github_repository}'"
            )
        raise ValueError("GITHUB_OWNER and GITHUB_REPO must be set (or GITHUB_REPOSITORY)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
