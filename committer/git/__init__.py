"""Git capability for committer.

This package provides:
- exceptions: GitError
- runner: _run_git_command, get_repo_root
- branch: get_branch, get_recent_commits, create_and_switch_branch
- status: get_status, get_staged_files, stage_all_changes
- diff: StagedDiff, get_staged_diff, _should_exclude_file
- commit: run_git_commit
- repository: GitRepository
"""

from committer.git.exceptions import GitError
from committer.git.runner import _run_git_command, get_repo_root
from committer.git.branch import (
    create_and_switch_branch,
    get_branch,
    get_recent_commits,
)
from committer.git.status import (
    get_staged_files,
    get_status,
    stage_all_changes,
)
from committer.git.diff import (
    StagedDiff,
    _should_exclude_file,
    get_staged_diff,
)
from committer.git.commit import run_git_commit
from committer.git.repository import GitRepository


__all__ = [
    "GitError",
    "_run_git_command",
    "get_repo_root",
    "get_branch",
    "get_recent_commits",
    "create_and_switch_branch",
    "get_status",
    "get_staged_files",
    "stage_all_changes",
    "StagedDiff",
    "get_staged_diff",
    "_should_exclude_file",
    "run_git_commit",
    "GitRepository",
]
