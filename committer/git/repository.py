"""Version-control capability used by the commit workflow."""

from typing import Optional

from committer.config import DEFAULT_MAX_DIFF_CHARS
from committer.git.branch import create_and_switch_branch, get_branch, get_recent_commits
from committer.git.commit import run_git_commit
from committer.git.diff import StagedDiff, get_staged_diff
from committer.git.status import get_staged_files, get_status, stage_all_changes


class GitRepository:
    """Git operations for the repository in the current directory.

    Every method raises GitError when the underlying git command fails.
    """

    def __init__(
        self,
        max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS,
        exclude_patterns: Optional[list[str]] = None,
    ) -> None:
        self.max_diff_chars = max_diff_chars
        self.exclude_patterns = exclude_patterns

    def current_branch(self) -> str:
        return get_branch()

    def recent_commits(self, n: int) -> list[str]:
        return get_recent_commits(n)

    def staged_files(self) -> list[str]:
        return get_staged_files()

    def diff(self) -> StagedDiff:
        return get_staged_diff(self.max_diff_chars, self.exclude_patterns)

    def status(self) -> str:
        return get_status()

    def stage_all(self) -> None:
        stage_all_changes()

    def create_and_switch_branch(self, name: str) -> None:
        create_and_switch_branch(name)

    def commit(self, message: str) -> None:
        run_git_commit(message)

    def collect_changes(self) -> tuple[StagedDiff, list[str]]:
        """Capture the staged diff and staged file list.

        The file list is the one the diff was built from, so git is asked
        for the staged paths once.

        Returns:
            (staged diff, staged file paths)

        Raises:
            GitError: If a git call fails.
        """
        staged_diff = self.diff()
        return staged_diff, list(staged_diff.staged_files)
