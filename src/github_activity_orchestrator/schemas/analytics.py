"""Pydantic schemas for persisted run analytics.

The on-disk format is a single JSON document::

    {"version": 1, "runs": [RunRecord, ...]}
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

ANALYTICS_SCHEMA_VERSION = 1


class RunRecord(BaseModel):
    """One finalized orchestrator run.

    Counters are non-negative; latency lists keep arrival order and hold
    milliseconds. Records are frozen once built.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    started_at: datetime = Field(description="When the run started (UTC)")
    finished_at: datetime = Field(description="When the run was finalized (UTC)")

    issues_created: int = Field(default=0, ge=0, description="Issues created")
    issues_closed: int = Field(default=0, ge=0, description="Issues closed via a merged PR")
    prs_opened: int = Field(default=0, ge=0, description="PRs opened")
    prs_merged: int = Field(default=0, ge=0, description="PRs merged")
    yolo_merges: int = Field(default=0, ge=0, description="PRs merged without review")
    comments_posted: int = Field(default=0, ge=0, description="Comments posted")
    co_authored_commits: int = Field(default=0, ge=0, description="Commits with a co-author")

    issue_to_first_comment_ms: list[int] = Field(
        default_factory=list,
        description="Issue creation -> first comment latency per iteration",
    )
    pr_open_to_merge_ms: list[int] = Field(
        default_factory=list,
        description="PR open -> merge latency per merged PR",
    )


class AnalyticsStore(BaseModel):
    """Every run recorded to date, tagged with the schema version.

    Unknown keys are ignored so files written by newer versions still load.
    """

    model_config = ConfigDict(extra="ignore")

    version: int = Field(default=ANALYTICS_SCHEMA_VERSION, ge=1, description="Schema version")
    runs: list[RunRecord] = Field(default_factory=list, description="Runs, oldest first")

    @classmethod
    def empty(cls) -> "AnalyticsStore":
        return cls(version=ANALYTICS_SCHEMA_VERSION, runs=[])
