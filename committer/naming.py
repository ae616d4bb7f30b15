"""Branch naming from commit messages.

Contains:
- slugify: Turn free text into a kebab-case slug, dropping filler words
- ParsedHeader / parse_commit_header: Conventional-commit first-line parsing
- synthesize_branch_name: Offline `<type>/<scope>-<description>` branch names
- is_valid_branch_name: Check a suggested name against the branch alphabet

Generated names follow `<type>/<scope>-<short-description>`, e.g.
`feat/auth-login`, `fix/ui-button-style`, `refactor/api-client`.
"""

import re
from dataclasses import dataclass
from typing import AbstractSet, Optional

from committer.config import BRANCH_SLUG_WORDS, FILLER_WORDS

# type(scope): description
_CONVENTIONAL_HEADER_RE = re.compile(r"^([a-z]+)(\(([^)]+)\))?:\s*(.+)$")

_INVALID_SLUG_CHARS_RE = re.compile(r"[^a-z0-9-]")
_ALPHANUMERIC_RE = re.compile(r"[a-z0-9]")

# <type>/<slug>, lowercase alphanumerics and hyphens only
BRANCH_NAME_RE = re.compile(r"^[a-z0-9-]+/[a-z0-9-]+$")

# Used when a description has no alphanumeric content (e.g. "feat: !!!")
_EMPTY_SLUG_PLACEHOLDER = "changes"

DEFAULT_COMMIT_TYPE = "feat"


@dataclass(frozen=True)
class ParsedHeader:
    """First line of a conventional commit message."""

    commit_type: str
    scope: Optional[str]
    description: str


def _clean_slug(words: list[str]) -> str:
    return _INVALID_SLUG_CHARS_RE.sub("", "-".join(words).lower())


def slugify(
    text: str,
    max_words: int = BRANCH_SLUG_WORDS,
    filler_words: AbstractSet[str] = FILLER_WORDS,
) -> str:
    """Convert text to a kebab-case slug suitable for branch names.

    Filler words are dropped (case-insensitively) and at most `max_words`
    words are kept. If every word is filler, the first `max_words` raw
    words are used instead so "Fix the bug" still yields a slug.

    Args:
        text: Free text, typically a commit description.
        max_words: Maximum number of words in the slug.
        filler_words: Lowercase words to drop.

    Returns:
        A slug containing only [a-z0-9-]. Hyphens are kept as written, so
        "foo - bar" gives "foo---bar" and "!!! ???" gives "-". Empty only
        when the text is blank or a single symbol-only word.
    """
    raw_words = text.split()
    words = [w for w in raw_words if w.lower() not in filler_words][:max_words]

    if not words:
        return _clean_slug(raw_words[:max_words])

    return _clean_slug(words)


def parse_commit_header(message: str) -> Optional[ParsedHeader]:
    """Parse the first line of a commit message as a conventional commit.

    Args:
        message: The full commit message.

    Returns:
        The parsed header, or None if the first line is not in
        `type(scope): description` form.
    """
    first_line = _first_line(message)
    match = _CONVENTIONAL_HEADER_RE.match(first_line)
    if not match:
        return None

    return ParsedHeader(
        commit_type=match.group(1),
        scope=match.group(3),
        description=match.group(4),
    )


def _first_line(message: str) -> str:
    lines = message.splitlines()
    return lines[0] if lines else message


def _normalize_scope(scope: str) -> str:
    """Bring a scope like "Auth UI" or "api/v2" into the branch name alphabet."""
    hyphenated = re.sub(r"[\s/]+", "-", scope.strip().lower())
    return _INVALID_SLUG_CHARS_RE.sub("", hyphenated).strip("-")


def _branch_slug(text: str, max_words: int, filler_words: AbstractSet[str]) -> str:
    slug = slugify(text, max_words, filler_words)
    # "" or "-" would leave nothing readable after the slash
    if not _ALPHANUMERIC_RE.search(slug):
        return _EMPTY_SLUG_PLACEHOLDER
    return slug


def is_valid_branch_name(name: str) -> bool:
    """Check that a name has the `<type>/<slug>` shape used for branches."""
    return bool(BRANCH_NAME_RE.match(name))


def synthesize_branch_name(
    commit_message: str,
    max_words: int = BRANCH_SLUG_WORDS,
    filler_words: AbstractSet[str] = FILLER_WORDS,
) -> str:
    """Generate a branch name from a commit message without the LLM.

    Args:
        commit_message: The commit message (only the first line is used).
        max_words: Maximum number of description words.
        filler_words: Lowercase words to drop from the description.

    Returns:
        `type/scope-slug`, `type/slug`, or `feat/slug` for messages that
        are not conventional commits.
    """
    header = parse_commit_header(commit_message)

    if header is None:
        slug = _branch_slug(_first_line(commit_message), max_words, filler_words)
        return f"{DEFAULT_COMMIT_TYPE}/{slug}"

    slug = _branch_slug(header.description, max_words, filler_words)
    scope = _normalize_scope(header.scope) if header.scope else ""

    if scope:
        return f"{header.commit_type}/{scope}-{slug}"
    return f"{header.commit_type}/{slug}"
