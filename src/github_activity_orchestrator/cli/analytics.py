"""Analytics commands: aggregate stats and the Markdown report."""

import json
from pathlib import Path

import typer

from github_activity_orchestrator.analytics import (
    AggregateStats,
    AnalyticsRepository,
    print_console_summary,
    write_markdown_report,
)
from github_activity_orchestrator.cli.common import OutputFormatOption, console
from github_activity_orchestrator.config import get_settings
from github_activity_orchestrator.github.workflow.enums import OutputFormat


def _load_stats() -> AggregateStats:
    repository = AnalyticsRepository(get_settings().analytics_path)
    return AggregateStats.from_runs(repository.load().runs)


def show_stats(output_format: OutputFormatOption = OutputFormat.TEXT) -> None:
    """Show aggregate statistics across every recorded run.

    Examples:
        ghorchestrator stats
        ghorchestrator stats --format json
    """
    stats = _load_stats()

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(stats.to_dict()))
        return

    if stats.total_runs == 0:
        console.print("[yellow]No runs recorded yet.[/yellow]")
    print_console_summary(stats, console)


def generate_report(
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the report (default: REPORT_PATH)",
    ),
) -> None:
    """Regenerate the Markdown analytics report.

    Examples:
        ghorchestrator report
        ghorchestrator report --output docs/analytics.md
    """
    target = output or Path(get_settings().report_path)
    if not write_markdown_report(_load_stats(), target):
        console.print(f"[red]Error:[/red] Could not write report to {target}")
        raise typer.Exit(1)
    console.print(f"[green]Report written to {target}[/green]")
