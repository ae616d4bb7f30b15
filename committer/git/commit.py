"""Git commit utilities."""

from committer.git.runner import _run_git_command


def run_git_commit(message: str) -> str:
    """Commit the staged changes with the given message.

    The message is passed on stdin so it is used verbatim.

    Args:
        message: The full commit message.

    Returns:
        git's summary output.

    Raises:
        GitError: If the commit fails (e.g. a hook rejects it).
    """
    return _run_git_command(["commit", "-F", "-"], input=message)
