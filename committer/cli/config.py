"""CLI commands for global configuration management."""

import os

import typer

from committer import global_config
from committer.config import API_KEY_ENV_VAR, load_config, parse_bool

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage committer configuration in ~/.committer/",
    add_completion=False,
)


def _set_bool(key: str, value: str) -> None:
    try:
        parsed = parse_bool(value)
    except ValueError as e:
        typer.echo(f"Invalid value: {e}", err=True)
        raise typer.Exit(1)

    try:
        global_config.set_config_value(key, parsed)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {key} set to {str(parsed).lower()}")


def _set_str(key: str, value: str) -> None:
    try:
        global_config.set_config_value(key, value)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {key} set to {value}")


@config_app.command("show")
def config_show() -> None:
    """Show current configuration."""
    try:
        config = load_config()
        api_key = global_config.get_credential(API_KEY_ENV_VAR)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Configuration")
    typer.echo(f"  file: {global_config.get_config_file_path()}")
    typer.echo()
    typer.echo(f"  auto_commit: {str(config.auto_commit).lower()}")
    typer.echo(f"  commit_after_branch: {str(config.commit_after_branch).lower()}")
    typer.echo(f"  verbose: {str(config.verbose).lower()}")
    typer.echo(f"  model: {config.model}")
    typer.echo(f"  editor: {config.editor or '$VISUAL / $EDITOR'}")
    typer.echo(f"  max_diff_chars: {config.max_diff_chars}")

    if os.getenv(API_KEY_ENV_VAR):
        typer.echo("  api_key: [set via env]")
    elif api_key:
        typer.echo("  api_key: [set in credentials]")
    else:
        typer.echo("  api_key: [not set]")


@config_app.command("auto-commit")
def config_auto_commit(
    value: str = typer.Argument(..., help="true or false"),
) -> None:
    """Set auto-commit behavior."""
    _set_bool("auto_commit", value)


@config_app.command("commit-after-branch")
def config_commit_after_branch(
    value: str = typer.Argument(..., help="true or false"),
) -> None:
    """Auto-commit after creating a branch via the 'b' option."""
    _set_bool("commit_after_branch", value)


@config_app.command("verbose")
def config_verbose(
    value: str = typer.Argument(..., help="true or false"),
) -> None:
    """Enable verbose operation logs by default."""
    _set_bool("verbose", value)


@config_app.command("model")
def config_model(
    value: str = typer.Argument(..., help="Model identifier (e.g., anthropic/claude-sonnet-4)"),
) -> None:
    """Set default model."""
    _set_str("model", value)


@config_app.command("editor")
def config_editor(
    value: str = typer.Argument(..., help="Editor command (e.g., vim, 'code --wait')"),
) -> None:
    """Set the editor used for message edits."""
    _set_str("editor", value)


@config_app.command("set-key")
def config_set_key() -> None:
    """Set or update the OpenRouter API key."""
    api_key = typer.prompt("Enter your OpenRouter API key", hide_input=True)

    try:
        global_config.save_credential(API_KEY_ENV_VAR, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ API key saved")
