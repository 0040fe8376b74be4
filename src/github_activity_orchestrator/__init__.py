"""GitHub Activity Orchestrator - drive an issue-to-merge workflow on GitHub."""

__version__ = "0.1.0"
