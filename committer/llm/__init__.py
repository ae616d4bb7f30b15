"""Completion service module for committer.

This module wraps the OpenRouter completion service and the operations
built on it (commit message generation, branch name suggestion).
"""

from typing import Optional

from dotenv import load_dotenv

from committer.llm.base import BaseLLMProvider
from committer.llm.exceptions import (
    EmptyResultError,
    LLMError,
    MalformedResponseError,
    MissingAPIKeyError,
    ServiceError,
)
from committer.llm.parsing import clean_commit_message, strip_code_fences
from committer.llm.prompts import (
    BRANCH_SUGGESTION_PROMPT_TEMPLATE,
    COMMIT_MESSAGE_PROMPT_TEMPLATE,
    SYSTEM_PROMPT,
)
from committer.naming import is_valid_branch_name

# Load environment variables from .env file
load_dotenv()


def get_provider(model: Optional[str] = None) -> BaseLLMProvider:
    """Get the completion service.

    Args:
        model: The OpenRouter model to use. Defaults to DEFAULT_MODEL.

    Returns:
        An OpenRouterProvider instance.
    """
    from committer.llm.openrouter_provider import OpenRouterProvider

    return OpenRouterProvider(model=model)


def generate_commit_message(
    provider: BaseLLMProvider,
    diff: str,
    files_changed: list[str],
) -> str:
    """Generate a conventional commit message from the staged diff.

    Args:
        provider: The completion service.
        diff: The staged diff text.
        files_changed: Paths of the staged files.

    Returns:
        The cleaned commit message.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        ServiceError: If the service call fails.
        EmptyResultError: If the service returns a blank message.
    """
    prompt = COMMIT_MESSAGE_PROMPT_TEMPLATE.format(
        files_changed=_format_files(files_changed),
        diff=diff,
    )
    message = clean_commit_message(provider.complete(prompt, system_prompt=SYSTEM_PROMPT))

    if not message:
        raise EmptyResultError("Empty commit message generated")
    return message


def suggest_branch_name(provider: BaseLLMProvider, commit_message: str) -> str:
    """Ask the completion service for a branch name for a commit message.

    Args:
        provider: The completion service.
        commit_message: The commit message the branch is for.

    Returns:
        The suggested branch name (first line of the answer, unquoted).

    Raises:
        ServiceError: If the service call fails.
        MalformedResponseError: If the answer is blank or not a valid
            `<type>/<slug>` branch name.
    """
    prompt = BRANCH_SUGGESTION_PROMPT_TEMPLATE.format(commit_message=commit_message)
    answer = strip_code_fences(provider.complete(prompt))

    lines = answer.splitlines()
    branch_name = lines[0].strip().strip("`'\"").strip() if lines else ""

    if not branch_name:
        raise MalformedResponseError("Empty branch name returned")
    if not is_valid_branch_name(branch_name):
        raise MalformedResponseError(f"Invalid branch name returned: {branch_name!r}")
    return branch_name


def _format_files(files: list[str]) -> str:
    if not files:
        return "(none)"
    return "\n".join(files)


__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "ServiceError",
    "MalformedResponseError",
    "EmptyResultError",
    "get_provider",
    "generate_commit_message",
    "suggest_branch_name",
]
