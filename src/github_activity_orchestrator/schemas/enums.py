"""Enums for Pydantic schemas."""

from enum import Enum


class MergeState(str, Enum):
    """Tri-state merge readiness of a pull request.

    GitHub reports ``mergeable: null`` while it is still computing.
    """

    MERGEABLE = "mergeable"
    NOT_MERGEABLE = "not_mergeable"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, mergeable: bool | None) -> "MergeState":
        """Map the API's ``mergeable`` field onto the tri-state."""
        if mergeable is True:
            return cls.MERGEABLE
        if mergeable is False:
            return cls.NOT_MERGEABLE
        return cls.UNKNOWN


class MergeMethod(str, Enum):
    """Merge methods accepted by the GitHub merge endpoint."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"
