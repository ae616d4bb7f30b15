"""Git status and staging utilities.

Contains:
- get_status: Get git status output in porcelain format
- get_staged_files: Get list of staged file paths
- stage_all_changes: Stage tracked, modified and untracked files
"""

from committer.git.runner import _run_git_command


def get_status() -> str:
    """Get git status output in porcelain format.

    Returns:
        The porcelain status; empty when the working tree is clean.
    """
    return _run_git_command(["status", "--porcelain=v1"])


def get_staged_files() -> list[str]:
    """Get list of staged file paths."""
    output = _run_git_command(["diff", "--staged", "--name-only"])
    if not output:
        return []
    return output.split("\n")


def stage_all_changes() -> None:
    """Stage every change in the working tree, including untracked files."""
    _run_git_command(["add", "--all"])
