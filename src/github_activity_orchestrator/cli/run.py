"""Workflow run command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from github_activity_orchestrator.analytics import (
    AggregateStats,
    AnalyticsAccumulator,
    AnalyticsRepository,
    print_console_summary,
    write_markdown_report,
)
from github_activity_orchestrator.cli.common import (
    OutputFormatOption,
    console,
    resolve_target_repo,
    run_async_command,
)
from github_activity_orchestrator.config import Settings, get_settings
from github_activity_orchestrator.github import (
    CommentService,
    GitHubClient,
    GitHubThrottlePolicy,
    IssueService,
    MergeabilityPoller,
    MergeCoordinator,
    OutputFormat,
    PullRequestService,
    RateLimitedExecutor,
    RunResult,
    WorkflowOrchestrator,
)
from github_activity_orchestrator.github.workflow import ContentGenerator


def build_orchestrator(
    settings: Settings,
    client: GitHubClient,
    analytics: AnalyticsAccumulator,
) -> WorkflowOrchestrator:
    """Wire the workflow services for one run.

    Every service shares one executor, so throttling is handled the same
    way for every remote call.
    """
    owner, repo = settings.target_repo()
    executor = RateLimitedExecutor(GitHubThrottlePolicy.from_config(settings.rate_limit))
    content = ContentGenerator()

    issues = IssueService(client, executor, owner, repo, content=content)
    comments = CommentService(client, executor, owner, repo, content=content)
    pull_requests = PullRequestService(
        client,
        executor,
        owner,
        repo,
        branch_prefix=settings.branch_prefix,
        co_author_name=settings.co_author_name,
        co_author_email=settings.co_author_email,
        content=content,
    )
    poller = MergeabilityPoller(pull_requests.check_merge_state, settings.mergeability)
    merger = MergeCoordinator(
        pull_requests,
        comments,
        poller,
        default_yolo=settings.yolo_mode,
        delays=settings.delays,
    )
    return WorkflowOrchestrator(
        issues=issues,
        comments=comments,
        pull_requests=pull_requests,
        merger=merger,
        analytics=analytics,
        settings=settings,
    )


def _apply_overrides(settings: Settings, **overrides: Any) -> Settings:
    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return settings
    # Unlike model_copy(update=...), this validates the overrides
    return Settings.model_validate({**settings.model_dump(), **update})


def run_workflow(
    max_issues: int | None = typer.Option(
        None,
        "--max-issues",
        min=1,
        help="Maximum issues to create this run (default: MAX_ISSUES_PER_RUN)",
    ),
    max_prs: int | None = typer.Option(
        None,
        "--max-prs",
        min=1,
        help="Maximum PRs to open this run (default: MAX_PRS_PER_RUN)",
    ),
    auto_merge: bool | None = typer.Option(
        None,
        "--auto-merge/--no-auto-merge",
        help="Merge PRs once mergeable (default: AUTO_MERGE)",
    ),
    yolo: bool | None = typer.Option(
        None,
        "--yolo/--no-yolo",
        help="Merge without a review comment (default: YOLO_MODE)",
    ),
    report: Path | None = typer.Option(
        None,
        "--report",
        help="Markdown report path (default: REPORT_PATH)",
    ),
    output_format: OutputFormatOption = OutputFormat.TEXT,
) -> None:
    """Run the issue -> comment -> PR -> comment -> merge workflow.

    Examples:
        ghorchestrator run
        ghorchestrator run --max-issues 3 --max-prs 3
        ghorchestrator run --yolo
        ghorchestrator run --no-auto-merge --format json
    """
    settings = _apply_overrides(
        get_settings(),
        max_issues_per_run=max_issues,
        max_prs_per_run=max_prs,
        auto_merge=auto_merge,
        yolo_mode=yolo,
    )
    owner, repo = resolve_target_repo(settings)
    repository = AnalyticsRepository(settings.analytics_path)

    async def _run() -> RunResult:
        async with GitHubClient(settings.github_token) as client:
            analytics = AnalyticsAccumulator(repository)
            orchestrator = build_orchestrator(settings, client, analytics)
            return await orchestrator.run()

    if output_format == OutputFormat.TEXT:
        console.print(
            f"[bold]Running workflow against {owner}/{repo}[/bold] "
            f"({settings.iterations_per_run} iteration(s))"
        )

    result = run_async_command(_run(), error_prefix="Run failed")

    stats = AggregateStats.from_runs(repository.load().runs)
    write_markdown_report(stats, report or settings.report_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps({**result.to_dict(), "totals": stats.to_dict()}))
        return

    _print_run_summary(result)
    print_console_summary(stats, console)


def _print_run_summary(result: RunResult) -> None:
    for iteration in result.iterations:
        issue = f"#{iteration.issue.number}" if iteration.issue else "-"
        pr = f"#{iteration.pull_request.number}" if iteration.pull_request else "-"
        if not iteration.success:
            console.print(
                f"  [red]✗[/red] Iteration {iteration.index}: issue {issue}, PR {pr} "
                f"[dim]({iteration.error})[/dim]"
            )
            continue
        if iteration.merged:
            outcome = "merged (YOLO)" if iteration.merge and iteration.merge.yolo else "merged"
        elif iteration.mergeable is False:
            outcome = "not mergeable, left open"
        else:
            outcome = "left open"
        console.print(
            f"  [green]✓[/green] Iteration {iteration.index}: issue {issue}, PR {pr} {outcome}"
        )

    console.print(
        f"\n[bold]Run complete:[/bold] {result.completed} completed, "
        f"{result.failed} failed in {result.duration_seconds:.1f}s"
    )
