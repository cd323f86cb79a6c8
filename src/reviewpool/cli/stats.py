"""Review statistics CLI commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(help="Review statistics commands")
console = Console()


@app.command()
def reviewers(
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (table or json)"),
    ] = "table",
) -> None:
    """Show the number of review assignments per user."""
    from reviewpool.main import get_app_context

    ctx = get_app_context()

    try:
        stats = ctx.run(ctx.review_engine.get_reviewer_stats())
    except Exception as e:
        console.print(f"[red]Error loading reviewer stats:[/red] {e}")
        raise typer.Exit(code=1)

    if format == "json":
        console.print_json(data=[s.model_dump() for s in stats])
        return

    if not stats:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Reviewer Assignments")
    table.add_column("User ID", style="cyan", no_wrap=True)
    table.add_column("Username", style="bold")
    table.add_column("Assignments", justify="right")

    for s in stats:
        table.add_row(s.user_id, s.username, str(s.total_assignments))

    console.print(table)


@app.command("pull-requests")
def pull_requests(
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (table or json)"),
    ] = "table",
) -> None:
    """Show pull request totals by status and reviewer presence."""
    from reviewpool.main import get_app_context

    ctx = get_app_context()

    try:
        stats = ctx.run(ctx.review_engine.get_pr_stats())
    except Exception as e:
        console.print(f"[red]Error loading pull request stats:[/red] {e}")
        raise typer.Exit(code=1)

    if format == "json":
        console.print_json(data=stats.model_dump())
        return

    table = Table(title="Pull Requests")
    table.add_column("Metric", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Total", str(stats.total_prs))
    table.add_row("Open", f"[green]{stats.open_prs}[/green]")
    table.add_row("Merged", f"[blue]{stats.merged_prs}[/blue]")
    table.add_row("With reviewers", str(stats.prs_with_reviewers))
    table.add_row("Without reviewers", str(stats.prs_without_reviewers))

    console.print(table)
