"""GitHub client exceptions."""

from datetime import datetime


class GitHubClientError(Exception):
    """Base exception for GitHub client errors.

    Carries the HTTP status (when the failure came from a response) and the
    server's Retry-After hint in seconds, if it sent one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retry_after: float | None = None,
        reset_at: datetime | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retry_after = retry_after
        self.reset_at = reset_at


class GitHubAuthenticationError(GitHubClientError):
    """Raised when authentication fails (401) or no token is configured."""

    pass


class GitHubRateLimitError(GitHubClientError):
    """Raised when GitHub throttles the caller (429, or 403 with rate limit headers)."""

    pass


class GitHubNotFoundError(GitHubClientError):
    """Raised when a resource is not found (404)."""

    pass


class GitHubValidationError(GitHubClientError):
    """Raised on 422, which GitHub also uses for "already exists"."""

    pass
