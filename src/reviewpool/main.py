"""Main CLI entry point for Reviewpool.

This module provides the main Typer application with sub-commands for
serving the HTTP API, creating the database schema and inspecting teams
and statistics.

Usage:
    reviewpool serve --port 8080
    reviewpool init-db
    reviewpool team show backend
    reviewpool team create backend.json
    reviewpool stats reviewers
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from collections.abc import Coroutine
from typing import Annotated, Any, Optional, TypeVar

import typer
from rich.console import Console

from reviewpool.cli import stats as stats_cli
from reviewpool.cli import team as team_cli
from reviewpool.config import ReviewpoolConfig, load_config
from reviewpool.database.connection import create_schema, get_engine, get_session_factory
from reviewpool.engine import ReviewEngine
from reviewpool.logging import setup_logging

T = TypeVar("T")

app = typer.Typer(
    name="reviewpool",
    help="Reviewpool: pull request reviewer assignment",
    no_args_is_help=True,
)

app.add_typer(team_cli.app, name="team", help="Manage teams")
app.add_typer(stats_cli.app, name="stats", help="Show review statistics")

console = Console()


class AppContext:
    """Application context shared across CLI commands.

    Attributes:
        config: Loaded Reviewpool configuration
        engine: Async SQLAlchemy engine
        session_factory: Factory for creating database sessions
        review_engine: Review engine bound to the session factory
    """

    def __init__(self, config: ReviewpoolConfig):
        self.config = config
        self.engine = get_engine(config.database)
        self.session_factory = get_session_factory(self.engine)
        self.review_engine = ReviewEngine(self.session_factory)

    def run(self, operation: Coroutine[Any, Any, T]) -> T:
        """Run one async operation to completion, then release the pool."""

        async def _run() -> T:
            try:
                return await operation
            finally:
                await self.engine.dispose()

        return asyncio.run(_run())


_app_context: AppContext | None = None


def get_app_context() -> AppContext:
    """Get the shared application context.

    Raises:
        RuntimeError: If context has not been initialized
    """
    if _app_context is None:
        raise RuntimeError("Application context not initialized. Call initialize_context first.")
    return _app_context


def initialize_context(config: ReviewpoolConfig) -> AppContext:
    global _app_context
    _app_context = AppContext(config)
    return _app_context


@app.command()
def serve(
    host: Annotated[
        Optional[str],
        typer.Option("--host", "-h", help="Host to bind to (default from config)"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Port to bind to (default from config)"),
    ] = None,
) -> None:
    """Start the Reviewpool HTTP API server."""
    import uvicorn

    from reviewpool.web.app import create_app

    ctx = get_app_context()
    bind_host = host or ctx.config.web.host
    bind_port = port or ctx.config.web.port

    console.print("[bold cyan]Starting Reviewpool API[/bold cyan]")
    console.print(f"[dim]Host:[/dim] {bind_host}")
    console.print(f"[dim]Port:[/dim] {bind_port}")
    console.print()

    uvicorn.run(
        create_app(ctx.config),
        host=bind_host,
        port=bind_port,
        log_level="info",
    )


@app.command("init-db")
def init_db() -> None:
    """Create all tables directly from the ORM metadata.

    Intended for development databases; production schemas are managed
    with Alembic (``alembic upgrade head``).
    """
    ctx = get_app_context()

    try:
        ctx.run(create_schema(ctx.engine))
    except Exception as e:
        console.print(f"[red]Error creating schema:[/red] {e}")
        raise typer.Exit(code=1)

    console.print("[green]Database schema created[/green]")


@app.callback()
def main_callback(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (TOML format)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options and initialize application context.

    Args:
        config_path: Optional path to TOML configuration file
        verbose: Enable debug-level logging
    """
    try:
        config = load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(code=1)

    if verbose:
        config.logging.level = "DEBUG"
    setup_logging(config.logging)

    try:
        initialize_context(config)
    except Exception as e:
        console.print(f"[red]Error initializing application:[/red] {e}")
        raise typer.Exit(code=1)

    if verbose:
        console.print("[dim]Debug logging enabled[/dim]")


if __name__ == "__main__":
    app()
