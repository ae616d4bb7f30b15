"""Git branch and commit history utilities.

Contains:
- get_branch: Get the current branch name
- get_recent_commits: Get the last n commit subjects
- create_and_switch_branch: Create a branch and check it out
"""

from committer.git.exceptions import GitError
from committer.git.runner import _run_git_command


def get_branch() -> str:
    """Get the current branch name.

    Returns:
        The current branch name, or 'HEAD (detached)' in detached state.
    """
    branch = _run_git_command(["branch", "--show-current"])
    if not branch:
        return "HEAD (detached)"
    return branch


def get_recent_commits(n: int = 5) -> list[str]:
    """Get the last n commit subjects, newest first.

    Args:
        n: Number of commits to retrieve.

    Returns:
        List of commit subject lines (empty in a repo without commits).
    """
    try:
        output = _run_git_command(["log", f"-n{n}", "--pretty=%s"])
    except GitError:
        # No commits yet in the repo
        return []
    if not output:
        return []
    return output.split("\n")


def create_and_switch_branch(name: str) -> None:
    """Create a new branch at HEAD and switch to it.

    Staged changes are carried over to the new branch.

    Args:
        name: The new branch name.

    Raises:
        GitError: If the branch exists or the name is invalid.
    """
    _run_git_command(["checkout", "-b", name])
