"""Branch alignment classification.

Decides whether a commit belongs on the current branch by asking the
completion service, and parses its answer strictly into an
AlignmentVerdict. Errors are raised to the caller; deciding whether to
fall back is left to the workflow.
"""

import json
from typing import AbstractSet, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from committer.config import PROTECTED_BRANCHES
from committer.llm.base import BaseLLMProvider
from committer.llm.exceptions import MalformedResponseError
from committer.llm.parsing import strip_code_fences
from committer.llm.prompts import BRANCH_ALIGNMENT_PROMPT_TEMPLATE
from committer.naming import is_valid_branch_name


class AlignmentVerdict(BaseModel):
    """Result of analyzing whether a commit belongs on the current branch.

    Attributes:
        matches: True if the commit aligns with the branch's purpose.
        reason: Explanation of the analysis result.
        suggested_branch: Suggested branch name on a mismatch. Ignored when
            `matches` is true.
    """

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    matches: bool
    reason: str
    suggested_branch: Optional[str] = None


def build_alignment_prompt(
    current_branch: str,
    commit_message: str,
    changed_files: list[str],
    recent_commits: list[str],
    protected_branches: AbstractSet[str] = PROTECTED_BRANCHES,
) -> str:
    """Build the branch alignment prompt.

    Args:
        current_branch: Name of the checked-out branch.
        commit_message: The new commit message.
        changed_files: Paths staged for this commit.
        recent_commits: Recent commit subjects on the branch, newest first.
        protected_branches: Branches that never receive direct commits.

    Returns:
        The formatted prompt.
    """
    return BRANCH_ALIGNMENT_PROMPT_TEMPLATE.format(
        current_branch=current_branch,
        recent_commits="\n".join(recent_commits) if recent_commits else "(no commits yet)",
        files_changed="\n".join(changed_files) if changed_files else "(none)",
        commit_message=commit_message,
        protected_branches=", ".join(sorted(protected_branches)),
    )


def parse_alignment_response(raw_response: str) -> AlignmentVerdict:
    """Parse a completion into an AlignmentVerdict.

    The response is trimmed and an optional surrounding code fence is
    removed; the rest must be a JSON object with exactly the verdict's
    keys and types. Nothing is coerced.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The parsed verdict.

    Raises:
        MalformedResponseError: If the text is not a well-formed verdict or
            the suggested branch is not a valid branch name.
    """
    content = strip_code_fences(raw_response)

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Failed to parse branch analysis: {e}\n"
            f"Raw response:\n{raw_response}"
        )

    if not isinstance(parsed, dict):
        raise MalformedResponseError(
            f"Branch analysis must be a JSON object.\n"
            f"Raw response:\n{raw_response}"
        )

    try:
        verdict = AlignmentVerdict.model_validate(parsed)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Branch analysis does not match expected schema.\n"
            f"Error: {e}\n"
            f"Parsed JSON: {parsed}"
        )

    # A blank suggestion is no suggestion
    if verdict.suggested_branch is None or not verdict.suggested_branch.strip():
        return verdict.model_copy(update={"suggested_branch": None})

    suggested_branch = verdict.suggested_branch.strip()
    if not is_valid_branch_name(suggested_branch):
        raise MalformedResponseError(
            f"Branch analysis suggested an invalid branch name: {suggested_branch!r}"
        )
    return verdict.model_copy(update={"suggested_branch": suggested_branch})


def classify_alignment(
    provider: BaseLLMProvider,
    current_branch: str,
    commit_message: str,
    changed_files: list[str],
    recent_commits: list[str],
    protected_branches: AbstractSet[str] = PROTECTED_BRANCHES,
) -> AlignmentVerdict:
    """Ask the completion service whether a commit belongs on the current branch.

    Args:
        provider: The completion service.
        current_branch: Name of the checked-out branch.
        commit_message: The new commit message.
        changed_files: Paths staged for this commit.
        recent_commits: Recent commit subjects on the branch.
        protected_branches: Branches that never receive direct commits.

    Returns:
        The service's verdict, unmodified.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        ServiceError: If the service call fails.
        MalformedResponseError: If the answer is not a well-formed verdict.
    """
    prompt = build_alignment_prompt(
        current_branch,
        commit_message,
        changed_files,
        recent_commits,
        protected_branches,
    )
    return parse_alignment_response(provider.complete(prompt))


def enforce_protected_branch(
    verdict: AlignmentVerdict,
    current_branch: str,
    protected_branches: AbstractSet[str] = PROTECTED_BRANCHES,
) -> AlignmentVerdict:
    """Force a mismatch for commits on protected branches.

    The prompt already tells the service never to match a protected
    branch; this makes the rule hold even when the service ignores it.

    Args:
        verdict: The verdict returned by the service.
        current_branch: Name of the checked-out branch.
        protected_branches: Branches that never receive direct commits.

    Returns:
        The verdict, with `matches` forced to False on a protected branch.
    """
    if current_branch not in protected_branches or not verdict.matches:
        return verdict

    return AlignmentVerdict(
        matches=False,
        reason=f"'{current_branch}' is a protected branch",
        suggested_branch=verdict.suggested_branch,
    )
