"""CLI entry point for committer.

This module provides the main CLI application that combines the default
commit command and the configuration subcommands.
"""

import typer

from committer.cli.config import config_app
from committer.cli.main import main_command

# Main application
app = typer.Typer(
    name="committer",
    help="committer: AI-powered git commits with branch alignment checks",
    add_completion=False,
)

app.add_typer(config_app, name="config")

# Default behavior runs when no subcommand is given
app.callback(invoke_without_command=True)(main_command)


def main() -> None:
    """Console script entry point."""
    app()


__all__ = [
    "app",
    "config_app",
    "main_command",
    "main",
]
