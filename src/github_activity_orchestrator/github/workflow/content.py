"""Text content for issues, PRs, comments and generated files.

Every string comes from a curated pool of realistic, non-spammy text.
Randomness goes through an injectable ``random.Random`` so tests can pin
the choices.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass

GENERATED_DIR = "src/generated"

ISSUE_TITLES: tuple[str, ...] = (
    "Refactor utility functions for readability",
    "Add input validation to configuration loader",
    "Improve error messages in API client",
    "Document analytics output format",
    "Add retry logic for transient network failures",
    "Normalise date handling across modules",
    "Extract shared constants into a dedicated module",
    "Add integration test scaffold",
    "Improve logging granularity in orchestrator loop",
    "Tighten type checking settings",
    "Add health-check command for monitoring",
    "Reduce cyclomatic complexity in merge coordinator",
    "Standardise branch naming convention",
    "Update dependencies to latest stable versions",
    "Add CONTRIBUTING.md with development guidelines",
)

ISSUE_BODIES: tuple[str, ...] = (
    "## Problem\nThe current implementation could benefit from improved clarity and "
    "maintainability.\n\n## Proposed Solution\nRefactor the affected module with smaller, "
    "well-named functions and add docstrings.\n\n## Acceptance Criteria\n"
    "- [ ] No new lint warnings\n- [ ] Existing behaviour is preserved",
    "## Context\nAs the project grows, we need better input validation to catch "
    "misconfigurations early.\n\n## Details\nValidate all required environment variables at "
    "startup and surface actionable error messages.\n\n## Acceptance Criteria\n"
    "- [ ] Invalid config fails with a human-readable message\n"
    "- [ ] All settings documented in `.env.example`",
    "## Motivation\nImproved developer experience when debugging failed API calls.\n\n"
    "## Plan\n1. Wrap client errors with contextual messages\n"
    "2. Log request URL and status code at debug level\n"
    "3. Surface rate-limit headers when relevant\n\n## Acceptance Criteria\n"
    "- [ ] Errors include the GitHub API endpoint\n- [ ] Rate-limit warnings appear proactively",
    "## Overview\nThe analytics module outputs data but the format is undocumented.\n\n"
    "## Task\nAdd a section to the README explaining each metric, its unit, and how it is "
    "calculated.\n\n## Acceptance Criteria\n- [ ] Every metric has a one-line description\n"
    "- [ ] Example output is included",
    "## Objective\nTransient 5xx responses from GitHub should not abort the entire run.\n\n"
    "## Approach\nRetry with exponential back-off and jitter, capped at 3 attempts.\n\n"
    "## Acceptance Criteria\n- [ ] Retries are logged at warning level\n"
    "- [ ] Non-retriable errors (4xx) are surfaced immediately",
)

PR_DESCRIPTIONS: tuple[str, ...] = (
    "This pull request addresses the linked issue by refactoring the relevant module.\n\n"
    "Changes:\n- Extracted helper functions for clarity\n- Added docstrings explaining intent\n"
    "- No behavioural changes; all existing tests pass",
    "Implements the improvement described in the linked issue.\n\nHighlights:\n"
    "- Added validation logic with clear error messages\n"
    "- Updated `.env.example` to reflect new variables\n- Manual smoke-test passed",
    "Resolves the linked issue.\n\nSummary of changes:\n"
    "- Improved error wrapping in the API client\n"
    "- Added debug-level logging for request metadata\n"
    "- Covered edge cases for rate-limit responses",
    "This PR adds documentation and minor code clean-up.\n\nDelta:\n"
    "- New section in README documenting analytics output\n"
    "- Corrected a few typos in comments\n- No logic changes",
)

COMMENTS: tuple[str, ...] = (
    "Looks good to me. Clean implementation, nice work!",
    "I reviewed the changes and everything looks solid. Ready to merge.",
    "Thanks for tackling this. The refactor makes the code much easier to follow.",
    "One minor thought: a note on the retry ceiling would help, but it's fine as-is too.",
    "LGTM. The validation messages are really helpful for onboarding new contributors.",
    "Tested locally and confirmed the fix works as expected. Ship it!",
    "Appreciate the thorough PR description, it makes the review a breeze.",
    "Great improvement to the logging output. This will save debugging time.",
)

FILE_CONTENTS: tuple[str, ...] = (
    '"""Shared constants used across the project."""\n\n'
    "MAX_RETRIES = 3\nRETRY_BASE_SECONDS = 1.0\nDEFAULT_PAGE_SIZE = 30\n",
    '"""Recursively freeze nested dicts and lists."""\n\n'
    "from types import MappingProxyType\n\n\n"
    "def deep_freeze(value):\n"
    "    if isinstance(value, dict):\n"
    "        return MappingProxyType({k: deep_freeze(v) for k, v in value.items()})\n"
    "    if isinstance(value, list):\n"
    "        return tuple(deep_freeze(v) for v in value)\n"
    "    return value\n",
    '"""Strip control characters from user input."""\n\n'
    "import re\n\n_CONTROL = re.compile(r\"[\\x00-\\x1f\\x7f]\")\n\n\n"
    "def sanitise_input(raw: str) -> str:\n"
    '    return _CONTROL.sub("", raw).strip()\n',
    '"""Human-friendly durations."""\n\n\n'
    "def format_duration(seconds: float) -> str:\n"
    "    minutes, secs = divmod(int(seconds), 60)\n"
    "    hours, minutes = divmod(minutes, 60)\n"
    "    parts = [f\"{hours}h\"] if hours else []\n"
    "    if minutes:\n"
    "        parts.append(f\"{minutes}m\")\n"
    "    parts.append(f\"{secs}s\")\n"
    '    return " ".join(parts)\n',
)


@dataclass(frozen=True)
class LabelSpec:
    """A label the orchestrator attaches to the issues it opens."""

    name: str
    color: str
    description: str


ORCHESTRATOR_LABELS: tuple[LabelSpec, ...] = (
    LabelSpec("orchestrator", "5319e7", "Created by the activity orchestrator"),
    LabelSpec("automated", "c5def5", "Opened by automation"),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str, max_length: int = 60) -> str:
    """Convert free text into a branch/URL-safe slug."""
    slug = _NON_ALNUM.sub("-", text.lower()).strip("-")
    return slug[:max_length].rstrip("-")


def generated_file_path(slug: str) -> str:
    """Path of the file committed for an iteration."""
    return f"{GENERATED_DIR}/{slug.replace('-', '_')}.py"


def co_author_trailer(name: str, email: str) -> str:
    """Git ``Co-authored-by`` trailer, or an empty string if unconfigured."""
    if not name.strip() or not email.strip():
        return ""
    return f"\n\nCo-authored-by: {name.strip()} <{email.strip()}>"


class ContentGenerator:
    """Draws titles, bodies, comments and file contents from the pools."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def issue_title(self) -> str:
        return self._rng.choice(ISSUE_TITLES)

    def issue_body(self) -> str:
        return self._rng.choice(ISSUE_BODIES)

    def pr_description(self) -> str:
        return self._rng.choice(PR_DESCRIPTIONS)

    def comment(self) -> str:
        return self._rng.choice(COMMENTS)

    def file_content(self) -> str:
        return self._rng.choice(FILE_CONTENTS)

    def short_id(self) -> str:
        """Six hex characters, enough to keep branch and file names unique."""
        return f"{self._rng.getrandbits(24):06x}"
