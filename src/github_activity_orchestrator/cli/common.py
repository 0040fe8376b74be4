"""Helpers shared by the CLI commands:

- `OutputFormatOption`: The `--format` / `-f` option used by `run` and `stats`
- `run_async_command`: Unified async execution with error handling for CLI commands
- `resolve_target_repo`: Settings-driven owner/repo resolution with a clean exit
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Annotated, TypeVar

import typer
from rich.console import Console

from github_activity_orchestrator.github.workflow.enums import OutputFormat

if TYPE_CHECKING:
    from github_activity_orchestrator.config import Settings

# Shared console instance for CLI output
console = Console()

T = TypeVar("T")


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Uses asyncio.run() for clean event loop management. Catches exceptions,
    prints user-friendly error messages, and exits with code 1.

    Args:
        coro: Async coroutine to execute
        error_prefix: Prefix for error messages (default: "Error")

    Returns:
        Result from the coroutine

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


def resolve_target_repo(settings: Settings) -> tuple[str, str]:
    """Resolve (owner, repo) from settings.

    Raises:
        typer.Exit(1): If the token or the target repository is missing
    """
    if not settings.github_token:
        console.print("[red]Error:[/red] GITHUB_TOKEN not set in environment")
        raise typer.Exit(1)
    try:
        return settings.target_repo()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]
"""Output format option type for CLI commands.

Usage:
    def command(output_format: OutputFormatOption = OutputFormat.TEXT):
"""
