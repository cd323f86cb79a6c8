"""Team management CLI commands.

``create`` reads a JSON document of the same shape the HTTP API accepts::

    {"team_name": "backend",
     "members": [{"user_id": "u1", "username": "alice", "is_active": true}]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from pydantic import BaseModel, Field, ValidationError
from rich.console import Console
from rich.table import Table

from reviewpool.engine import Team, TeamMember
from reviewpool.errors import ReviewpoolError

app = typer.Typer(help="Team management commands")
console = Console()


class TeamDocument(BaseModel):
    team_name: str
    members: list[TeamMember] = Field(default_factory=list)


def render_team(team: Team) -> Table:
    table = Table(title=f"Team {team.team_name}")
    table.add_column("User ID", style="cyan", no_wrap=True)
    table.add_column("Username", style="bold")
    table.add_column("Active")

    for member in team.members:
        active = "[green]yes[/green]" if member.is_active else "[dim]no[/dim]"
        table.add_row(member.user_id, member.username, active)

    return table


@app.command()
def show(
    team_name: Annotated[str, typer.Argument(help="Team name")],
) -> None:
    """Show a team and its members."""
    from reviewpool.main import get_app_context

    ctx = get_app_context()

    try:
        team = ctx.run(ctx.review_engine.get_team(team_name))
    except ReviewpoolError as e:
        console.print(f"[red]{e.code}:[/red] {e.message}")
        raise typer.Exit(code=1)

    console.print(render_team(team))


@app.command()
def create(
    team_file: Annotated[
        Path,
        typer.Argument(
            help="Path to team JSON file",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
) -> None:
    """Create a team from a JSON file, moving listed users into it."""
    from reviewpool.main import get_app_context

    ctx = get_app_context()

    try:
        document = TeamDocument.model_validate(json.loads(team_file.read_text()))
    except (json.JSONDecodeError, ValidationError) as e:
        console.print(f"[red]Invalid team file:[/red] {e}")
        raise typer.Exit(code=1)

    try:
        team = ctx.run(ctx.review_engine.create_team(document.team_name, document.members))
    except ReviewpoolError as e:
        console.print(f"[red]{e.code}:[/red] {e.message}")
        raise typer.Exit(code=1)

    console.print(f"[green]Team created:[/green] {team.team_name}")
    console.print(render_team(team))
