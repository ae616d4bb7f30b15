"""Shared utility functions for CLI commands."""

import os
import shlex
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional

import typer

from committer.ui import TextEditor


def find_editor(preferred: Optional[str] = None) -> list[str]:
    """Find an available text editor.

    Preference order:
    1. The `editor` setting from ~/.committer/config.yaml
    2. $VISUAL, then $EDITOR
    3. nano as fallback
    4. vi as last resort

    Args:
        preferred: Editor command from configuration (may include arguments,
            e.g. "code --wait").

    Returns:
        List of command parts to run the editor.
    """
    for candidate in (preferred, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if candidate and candidate.strip():
            return shlex.split(candidate)

    # noinspection PyArgumentList
    if shutil.which("nano"):
        return ["nano"]

    return ["vi"]


def open_editor(file_path: Path, preferred: Optional[str] = None) -> bool:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
        preferred: Editor command from configuration.

    Returns:
        True if the editor exited successfully.
    """
    editor_cmd = find_editor(preferred)

    try:
        result = subprocess.run(editor_cmd + [str(file_path)], check=False)
    except FileNotFoundError:
        typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)
        return False

    if result.returncode != 0:
        typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)
        return False
    return True


class ExternalEditor(TextEditor):
    """Edit text in the user's editor through a temporary file."""

    def __init__(self, preferred: Optional[str] = None) -> None:
        self.preferred = preferred

    def edit(self, text: str) -> str:
        """Open `text` in the editor and return the saved result.

        Returns the original text if the editor fails or the file is
        saved empty.
        """
        fd, name = tempfile.mkstemp(prefix="committer-", suffix=".txt")
        path = Path(name)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(text)

            if not open_editor(path, self.preferred):
                return text

            edited = path.read_text().strip()
        finally:
            path.unlink(missing_ok=True)

        return edited or text


def make_diagnostic(enabled: bool) -> Callable[[str, str], None]:
    """Build the verbose diagnostic printer.

    Args:
        enabled: Whether verbose output is on.

    Returns:
        A function taking (label, text) that prints "[label]: text" to
        stderr when enabled and does nothing otherwise.
    """

    def diagnostic(label: str, text: str) -> None:
        if enabled:
            typer.echo(f"[{label}]: {text}", err=True)

    return diagnostic
