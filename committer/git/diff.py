"""Git diff utilities.

Contains:
- StagedDiff: The staged diff plus what was left out of it
- get_staged_diff: Get the staged diff, excluding ignored files
- _should_exclude_file: Check if a file should be excluded based on patterns
"""

import fnmatch
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from committer.config import DEFAULT_DIFF_EXCLUDE_PATTERNS, DEFAULT_MAX_DIFF_CHARS
from committer.git.runner import _run_git_command
from committer.git.status import get_staged_files

TRUNCATION_MARKER = "\n...[truncated]\n"

ONLY_EXCLUDED_PLACEHOLDER = "(Only ignored files staged - no code changes to describe)"


@dataclass
class StagedDiff:
    """The staged diff sent to the LLM.

    `staged_files` lists every staged path, including the excluded ones,
    so callers do not need a second `git diff --staged --name-only`.
    """

    text: str
    excluded_files: list[str] = field(default_factory=list)
    truncated: bool = False
    staged_files: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


def _should_exclude_file(filename: str, patterns: list[str]) -> bool:
    """Check if a file should be excluded based on patterns.

    Supports glob patterns like *.lock, build/*, etc.

    Args:
        filename: The file path to check.
        patterns: List of patterns to match against.

    Returns:
        True if the file should be excluded.
    """
    for pattern in patterns:
        if filename == pattern:
            return True
        if fnmatch.fnmatch(filename, pattern):
            return True
        # Patterns like "*.lock" should match in any directory
        if fnmatch.fnmatch(Path(filename).name, pattern):
            return True
    return False


def get_staged_diff(
    max_chars: int = DEFAULT_MAX_DIFF_CHARS,
    exclude_patterns: Optional[list[str]] = None,
) -> StagedDiff:
    """Get the staged diff, excluding ignored files and truncating if necessary.

    Lock files and generated artifacts are excluded because they inflate
    the diff without adding useful context for the commit message.

    Args:
        max_chars: Maximum characters for the diff output.
        exclude_patterns: Glob patterns of files to leave out. Defaults to
            DEFAULT_DIFF_EXCLUDE_PATTERNS.

    Returns:
        The staged diff and the full staged file list. Its text is empty
        when nothing is staged.
    """
    if exclude_patterns is None:
        exclude_patterns = DEFAULT_DIFF_EXCLUDE_PATTERNS

    staged_files = get_staged_files()
    if not staged_files:
        return StagedDiff(text="")

    files_to_include = []
    excluded_files = []
    for f in staged_files:
        if _should_exclude_file(f, exclude_patterns):
            excluded_files.append(f)
        else:
            files_to_include.append(f)

    if not files_to_include:
        return StagedDiff(
            text=ONLY_EXCLUDED_PLACEHOLDER,
            excluded_files=excluded_files,
            staged_files=staged_files,
        )

    diff = _run_git_command(["diff", "--staged", "--"] + files_to_include)

    truncated = len(diff) > max_chars
    if truncated:
        diff = diff[:max_chars] + TRUNCATION_MARKER

    return StagedDiff(
        text=diff,
        excluded_files=excluded_files,
        truncated=truncated,
        staged_files=staged_files,
    )
