"""Text cleanup for completion service responses.

Contains:
- strip_code_fences: Remove a surrounding markdown code fence
- clean_commit_message: Normalize a generated commit message
"""

import re

# Opening fence with an optional language tag (```json, ```text, ...)
_OPENING_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE_RE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(raw_response: str) -> str:
    """Strip whitespace and a leading/trailing triple-backtick fence.

    Models sometimes wrap answers in markdown fences despite instructions.
    Only an outermost fence is removed; the content is otherwise untouched.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The unfenced, stripped text.
    """
    cleaned = raw_response.strip()
    cleaned = _OPENING_FENCE_RE.sub("", cleaned, count=1)
    cleaned = _CLOSING_FENCE_RE.sub("", cleaned, count=1)
    return cleaned.strip()


def clean_commit_message(raw_response: str) -> str:
    """Normalize a generated commit message.

    Removes fences and trailing whitespace on each line, and collapses
    runs of blank lines so the header is followed by at most one.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The cleaned commit message (may be empty).
    """
    text = strip_code_fences(raw_response)
    lines = [line.rstrip() for line in text.splitlines()]

    cleaned: list[str] = []
    for line in lines:
        if not line and cleaned and not cleaned[-1]:
            continue
        cleaned.append(line)

    return "\n".join(cleaned).strip()
