"""Command-line interface for GitHub Activity Orchestrator."""
