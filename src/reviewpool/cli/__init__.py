"""Typer sub-commands for the ``reviewpool`` CLI."""
