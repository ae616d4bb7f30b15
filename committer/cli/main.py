"""Main CLI command: generate a commit message and commit it."""

from typing import Optional

import typer

from committer import __version__
from committer.config import load_config
from committer.git import GitError, GitRepository, get_repo_root
from committer.global_config import GlobalConfigError
from committer.llm import (
    EmptyResultError,
    LLMError,
    MissingAPIKeyError,
    generate_commit_message,
    get_provider,
)
from committer.ui import TerminalUI
from committer.workflow import CommitWorkflow, WorkflowOptions
from committer.cli.utils import ExternalEditor, make_diagnostic


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"committer {__version__}")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Auto-commit without asking (also accepts branch suggestions)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-d",
        help="Just print the message, don't commit",
    ),
    all_changes: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Stage all changes (including untracked files) first",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Override model for this run",
    ),
    branch: bool = typer.Option(
        False,
        "--branch",
        "-b",
        help="Check branch alignment and offer a new branch on mismatch [y/n/e]",
    ),
    auto_branch: bool = typer.Option(
        False,
        "--auto-branch",
        "-B",
        help="Check branch alignment and create the suggested branch on mismatch",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed operation logs (excluded files, truncation, etc.)",
    ),
    max_diff_chars: Optional[int] = typer.Option(
        None,
        "--max-diff-chars",
        help="Maximum characters of staged diff sent to the model",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate an AI-powered commit message from staged changes and commit it."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    try:
        config = load_config()
        verbose = verbose or config.verbose
        diagnostic = make_diagnostic(verbose)

        provider = get_provider(model or config.model)
        # Fail before touching the repository if there is no key
        provider.get_api_key()

        get_repo_root()

        repo = GitRepository(
            max_diff_chars=max_diff_chars if max_diff_chars is not None else config.max_diff_chars,
            exclude_patterns=config.diff_exclude,
        )

        if all_changes:
            repo.stage_all()

        staged_diff, files = repo.collect_changes()

        if staged_diff.excluded_files:
            diagnostic("Diff", f"excluded {', '.join(staged_diff.excluded_files)}")
        if staged_diff.truncated:
            diagnostic("Diff", f"truncated to {repo.max_diff_chars} characters")

        if staged_diff.is_empty:
            if not repo.status().strip():
                typer.echo("✓ Nothing to commit")
                raise typer.Exit(0)
            typer.echo("⚠ No staged changes", err=True)
            typer.echo("  → Use 'git add' or --all", err=True)
            raise typer.Exit(1)

        typer.echo("Generating commit message...", err=True)
        diagnostic("Model", provider.model)
        message = generate_commit_message(provider, staged_diff.text, files)

        if dry_run:
            typer.echo(message)
            return

        options = WorkflowOptions(
            check_alignment=branch or auto_branch,
            auto_branch=auto_branch or yes,
            auto_commit=yes or config.auto_commit,
            commit_after_branch=config.commit_after_branch,
        )
        workflow = CommitWorkflow(
            repo=repo,
            ui=TerminalUI(),
            editor=ExternalEditor(config.editor),
            provider=provider,
            options=options,
            diagnostic=diagnostic,
        )
        workflow.run(message, files)

    except MissingAPIKeyError as e:
        typer.echo("✗ No API key found", err=True)
        typer.echo(f"{e}", err=True)
        raise typer.Exit(1)
    except EmptyResultError:
        typer.echo("✗ Empty commit message generated", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except GlobalConfigError as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)
