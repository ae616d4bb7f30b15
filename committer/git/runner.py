"""Subprocess seam between committer and the git executable.

Every git helper in committer.git goes through _run_git_command, so a
failing command always surfaces as GitError carrying git's own stderr.
The commit message itself travels on stdin (`git commit -F -`), which is
why the runner accepts input text.

Contains:
- _run_git_command: Run git with arguments and optional stdin text
- get_repo_root: Resolve the working tree root before reading staged changes
"""

import subprocess
from pathlib import Path
from typing import Optional

from committer.git.exceptions import GitError


def _run_git_command(args: list[str], input: Optional[str] = None) -> str:
    """Run `git <args>` in the current directory.

    Args:
        args: Arguments after `git`, e.g. ["diff", "--staged", "--name-only"].
        input: Text written to git's stdin, used to pass commit messages
            without a temporary file.

    Returns:
        Stripped stdout. Trailing newlines of multi-line output are removed.

    Raises:
        GitError: If git exits non-zero (stderr is included) or the git
            executable cannot be found.
    """
    try:
        completed = subprocess.run(
            ["git", *args],
            input=input,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{detail}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    return completed.stdout.strip()


def get_repo_root() -> Path:
    """Check that committer runs inside a work tree and return its root.

    The CLI calls this before collecting the staged diff, so a run outside
    a repository stops with one clear message instead of a failing
    `git diff`.

    Raises:
        GitError: If the current directory is not inside a git work tree.
    """
    try:
        return Path(_run_git_command(["rev-parse", "--show-toplevel"]))
    except GitError:
        raise GitError("Not in a git repository. Run committer from inside a git work tree.")
