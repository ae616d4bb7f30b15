"""User interaction for the commit workflow.

Contains:
- CommitChoice / parse_commit_choice: Review prompt answers
- BranchChoice / parse_branch_choice: Branch prompt answers
- WorkflowUI: Interface the workflow talks to
- TextEditor: Single-call text edit capability
- TerminalUI: typer-based implementation of WorkflowUI

All string-to-choice parsing happens in the parse_* functions so the
workflow can be driven without a terminal.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

import typer


class CommitChoice(Enum):
    """User's choice after reviewing a commit message."""

    COMMIT = "commit"
    CANCEL = "cancel"
    EDIT = "edit"
    BRANCH = "branch"


class BranchChoice(Enum):
    """User's choice when prompted about branch creation."""

    CREATE = "create"
    SKIP = "skip"
    EDIT = "edit"


_COMMIT_ANSWERS = {
    "y": CommitChoice.COMMIT,
    "yes": CommitChoice.COMMIT,
    "n": CommitChoice.CANCEL,
    "no": CommitChoice.CANCEL,
    "e": CommitChoice.EDIT,
    "edit": CommitChoice.EDIT,
    "b": CommitChoice.BRANCH,
    "branch": CommitChoice.BRANCH,
}

_BRANCH_ANSWERS = {
    "y": BranchChoice.CREATE,
    "yes": BranchChoice.CREATE,
    "n": BranchChoice.SKIP,
    "no": BranchChoice.SKIP,
    "e": BranchChoice.EDIT,
    "edit": BranchChoice.EDIT,
}


def parse_commit_choice(raw: str, show_branch_option: bool) -> Optional[CommitChoice]:
    """Parse an answer to the commit review prompt.

    Args:
        raw: The text the user typed.
        show_branch_option: Whether "create branch first" is on offer.

    Returns:
        The choice, or None if the answer is not valid here.
    """
    choice = _COMMIT_ANSWERS.get(raw.strip().lower())
    if choice is CommitChoice.BRANCH and not show_branch_option:
        return None
    return choice


def parse_branch_choice(raw: str) -> Optional[BranchChoice]:
    """Parse an answer to the branch creation prompt.

    Args:
        raw: The text the user typed.

    Returns:
        The choice, or None if the answer is not valid.
    """
    return _BRANCH_ANSWERS.get(raw.strip().lower())


class TextEditor(ABC):
    """Blocking text edit capability."""

    @abstractmethod
    def edit(self, text: str) -> str:
        """Let the user edit text.

        Returns:
            The edited text, or `text` unchanged if the user aborted.
        """
        pass


class WorkflowUI(ABC):
    """Everything the commit workflow shows to or asks of the user."""

    @abstractmethod
    def show_message(self, message: str) -> None:
        pass

    @abstractmethod
    def choose_commit_action(self, show_branch_option: bool) -> CommitChoice:
        pass

    @abstractmethod
    def choose_branch_action(
        self,
        current_branch: str,
        suggested_branch: str,
        reason: str,
        mismatch: bool,
    ) -> BranchChoice:
        pass

    @abstractmethod
    def prompt_branch_name(self, default: str) -> str:
        pass

    @abstractmethod
    def info(self, text: str) -> None:
        pass

    @abstractmethod
    def success(self, text: str) -> None:
        pass

    @abstractmethod
    def warn(self, text: str) -> None:
        pass


def _key(label: str) -> str:
    return typer.style(f"[{label}]", fg=typer.colors.CYAN, bold=True)


class TerminalUI(WorkflowUI):
    """Interactive prompts on the terminal.

    Prompts re-ask in a loop until a valid answer is given.
    """

    def show_message(self, message: str) -> None:
        typer.echo("")
        typer.echo("=" * 60)
        typer.echo(message)
        typer.echo("=" * 60)

    def _read_choice(self) -> str:
        return typer.prompt(
            typer.style("Choice", bold=True),
            default="",
            show_default=False,
        )

    def choose_commit_action(self, show_branch_option: bool) -> CommitChoice:
        typer.echo("")
        typer.echo(f"  {_key('y')} Commit")
        typer.echo(f"  {_key('n')} Cancel")
        typer.echo(f"  {_key('e')} Edit in $EDITOR")
        if show_branch_option:
            typer.echo(f"  {_key('b')} Create branch first")
        typer.echo("")

        hint = "Please enter y, n, e, or b" if show_branch_option else "Please enter y, n, or e"
        while True:
            choice = parse_commit_choice(self._read_choice(), show_branch_option)
            if choice is not None:
                return choice
            typer.echo(f"  → {hint}")

    def choose_branch_action(
        self,
        current_branch: str,
        suggested_branch: str,
        reason: str,
        mismatch: bool,
    ) -> BranchChoice:
        if mismatch:
            typer.echo("")
            typer.echo(typer.style("⚠ Branch mismatch detected", fg=typer.colors.YELLOW))
            typer.echo(f"  Current:   {current_branch}")
            typer.echo(f"  Suggested: {typer.style(suggested_branch, fg=typer.colors.GREEN)}")
            if reason:
                typer.echo(f"  Reason:    {reason}")

        typer.echo("")
        typer.echo(
            f"  {_key('y')} Create branch '{typer.style(suggested_branch, fg=typer.colors.GREEN)}'"
        )
        typer.echo(f"  {_key('n')} Stay on '{current_branch}'")
        typer.echo(f"  {_key('e')} Edit branch name")
        typer.echo("")

        while True:
            choice = parse_branch_choice(self._read_choice())
            if choice is not None:
                return choice
            typer.echo("  → Please enter y, n, or e")

    def prompt_branch_name(self, default: str) -> str:
        return typer.prompt("Branch name", default=default).strip()

    def info(self, text: str) -> None:
        typer.echo(f"→ {text}")

    def success(self, text: str) -> None:
        typer.echo(f"{typer.style('✓', fg=typer.colors.GREEN)} {text}")

    def warn(self, text: str) -> None:
        typer.echo(f"{typer.style('⚠', fg=typer.colors.YELLOW)} {text}", err=True)
