"""Main CLI application for GitHub Activity Orchestrator."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from github_activity_orchestrator import __version__
from github_activity_orchestrator.cli import analytics as analytics_cmd
from github_activity_orchestrator.cli import github as github_cmd
from github_activity_orchestrator.cli import run as run_cmd
from github_activity_orchestrator.config import get_settings
from github_activity_orchestrator.logging import setup_logging

app = typer.Typer(
    name="ghorchestrator",
    help="Drive a repeatable issue-to-merge workflow on GitHub and report on it.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ghorchestrator version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """GitHub Activity Orchestrator - issues, PRs, comments, merges, analytics."""
    settings = get_settings()
    log_config = settings.logging

    # Setup logging with CLI overrides
    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


app.command("run")(run_cmd.run_workflow)
app.command("stats")(analytics_cmd.show_stats)
app.command("report")(analytics_cmd.generate_report)

# Register subcommands
app.add_typer(github_cmd.app, name="github")


if __name__ == "__main__":
    app()
