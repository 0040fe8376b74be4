"""GitHub API verification and repository bootstrap commands."""

import typer
from rich.table import Table

from github_activity_orchestrator.cli.common import (
    console,
    resolve_target_repo,
    run_async_command,
)
from github_activity_orchestrator.config import get_settings
from github_activity_orchestrator.github import (
    GitHubAuthenticationError,
    GitHubClient,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubThrottlePolicy,
    IssueService,
    RateLimitedExecutor,
    RepositorySeeder,
)

app = typer.Typer(help="GitHub API commands")


@app.command("test")
def test_connection() -> None:
    """Test GitHub API connectivity, token validity and repository access.

    Examples:
        ghorchestrator github test
        ghorchestrator -v github test
    """
    settings = get_settings()
    owner, repo = resolve_target_repo(settings)

    async def _test() -> None:
        try:
            async with GitHubClient(settings.github_token) as client:
                console.print("[bold]Checking rate limit...[/bold]")
                rate = await client.get_rate_limit()
                reset_time = rate["reset"]
                reset_str = (
                    reset_time.strftime("%H:%M:%S UTC")
                    if hasattr(reset_time, "strftime")
                    else str(reset_time)
                )
                console.print(
                    f"  Rate limit: {rate['remaining']}/{rate['limit']} (resets at {reset_str})"
                )
                if isinstance(rate["remaining"], int) and rate["remaining"] < 10:
                    console.print("[yellow]Warning:[/yellow] Low rate limit remaining")

                console.print(f"\n[bold]Fetching {owner}/{repo}...[/bold]")
                repository = await client.get_repository(owner, repo)
                permissions = repository.permissions

                table = Table(title=repository.full_name)
                table.add_column("Property", style="bold")
                table.add_column("Value", style="cyan")
                table.add_row("Default branch", repository.default_branch)
                table.add_row("Visibility", repository.visibility or "unknown")
                table.add_row("Push", str(permissions.push if permissions else False))
                table.add_row("Admin", str(permissions.admin if permissions else False))
                console.print(table)

                if not permissions or not permissions.push:
                    console.print(
                        "[yellow]Warning:[/yellow] Token cannot push; the workflow will fail"
                    )

                console.print("\n[green]GitHub API connection verified![/green]")

        except GitHubAuthenticationError:
            console.print("[red]Error:[/red] Invalid GitHub token")
            raise typer.Exit(1) from None
        except GitHubRateLimitError as e:
            console.print("[red]Error:[/red] Rate limit exceeded")
            if e.reset_at:
                console.print(f"  Resets at: {e.reset_at.strftime('%H:%M:%S UTC')}")
            raise typer.Exit(1) from None
        except GitHubNotFoundError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1) from None

    run_async_command(_test())


@app.command("seed")
def seed_repository() -> None:
    """Prepare the target repository: verify push access, labels, src/generated/.

    Optional; the workflow creates missing labels itself.

    Examples:
        ghorchestrator github seed
    """
    settings = get_settings()
    owner, repo = resolve_target_repo(settings)

    async def _seed() -> None:
        async with GitHubClient(settings.github_token) as client:
            executor = RateLimitedExecutor(GitHubThrottlePolicy.from_config(settings.rate_limit))
            issues = IssueService(client, executor, owner, repo)
            result = await RepositorySeeder(client, executor, issues, owner, repo).seed()

        console.print(f"[bold]Repository:[/bold] {result.full_name}")
        console.print(f"  Default branch: {result.default_branch}")
        console.print(f"  Visibility: {result.visibility or 'unknown'}")
        if result.labels_created:
            console.print(f"  Labels created: {', '.join(result.labels_created)}")
        else:
            console.print("  Labels: already present")
        console.print(
            "  Placeholder: committed"
            if result.placeholder_created
            else "  Placeholder: already present"
        )
        console.print("\n[green]Seed complete.[/green] Run [bold]ghorchestrator run[/bold] next.")

    run_async_command(_seed(), error_prefix="Seed failed")
