"""Configuration for committer.

Settings are loaded from ~/.committer/config.yaml.
Use 'committer config' commands to modify them.
"""

from typing import Optional

from pydantic import BaseModel, ValidationError


# ============================================================
# LLM SETTINGS
# ============================================================

DEFAULT_MODEL = "google/gemini-3-flash-preview"
MAX_TOKENS = 1500
TEMPERATURE = 0.3

API_KEY_ENV_VAR = "OPENROUTER_API_KEY"


# ============================================================
# BRANCH ALIGNMENT
# ============================================================

# Branches that never receive direct commits
PROTECTED_BRANCHES = frozenset(
    {"main", "master", "develop", "dev", "staging", "production"}
)

# Words dropped when slugifying a commit description into a branch name
FILLER_WORDS = frozenset(
    {
        # Generic verbs
        "add", "update", "fix", "remove", "delete", "change", "modify",
        "implement", "create", "make", "set", "get", "use", "handle",
        "support", "enable", "disable", "allow", "improve", "enhance",
        # Articles, prepositions, conjunctions
        "the", "a", "an", "to", "for", "of", "in", "on", "with", "and", "or",
    }
)

BRANCH_SLUG_WORDS = 3
RECENT_COMMIT_COUNT = 5


# ============================================================
# DIFF
# ============================================================

DEFAULT_MAX_DIFF_CHARS = 50000

# Auto-generated files that inflate the diff without describing the change
DEFAULT_DIFF_EXCLUDE_PATTERNS = [
    "poetry.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "Cargo.lock",
    "Gemfile.lock",
    "composer.lock",
    "go.sum",
    "uv.lock",
    "*.min.js",
    "*.min.css",
    "*.map",
]


class CommitterConfig(BaseModel):
    """User preferences persisted in ~/.committer/config.yaml.

    Attributes:
        auto_commit: Commit without the review prompt.
        commit_after_branch: Commit right after creating a branch via the 'b' option.
        model: OpenRouter model identifier.
        verbose: Print diagnostic lines to stderr.
        editor: Editor command used for message edits (falls back to $VISUAL/$EDITOR).
        max_diff_chars: Maximum characters of staged diff sent to the LLM.
        diff_exclude: Glob patterns of files left out of the diff.
    """

    auto_commit: bool = False
    commit_after_branch: bool = False
    model: str = DEFAULT_MODEL
    verbose: bool = False
    editor: Optional[str] = None
    max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS
    diff_exclude: list[str] = list(DEFAULT_DIFF_EXCLUDE_PATTERNS)


# Keys that 'committer config <key> <value>' may write as booleans
BOOLEAN_SETTINGS = ("auto_commit", "commit_after_branch", "verbose")


def load_config() -> CommitterConfig:
    """Load configuration from the global config file.

    Unknown keys are ignored. A value that fails validation falls back to
    its default so a hand-edited file never blocks a commit.

    Returns:
        The effective CommitterConfig.

    Raises:
        GlobalConfigError: If the config file exists but cannot be read.
    """
    # Import here to avoid circular dependency
    from committer import global_config

    raw = global_config.load_global_config()
    known = {
        key: value
        for key, value in raw.items()
        if key in CommitterConfig.model_fields and value is not None
    }

    try:
        return CommitterConfig(**known)
    except ValidationError as e:
        invalid = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        valid = {key: value for key, value in known.items() if key not in invalid}
        return CommitterConfig(**valid)


def parse_bool(value: str) -> bool:
    """Parse a boolean setting from the command line.

    Args:
        value: One of true/false, yes/no, on/off, 1/0 (case-insensitive).

    Returns:
        The boolean value.

    Raises:
        ValueError: If the value is not a recognised boolean.
    """
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "on", "1"):
        return True
    if lowered in ("false", "no", "off", "0"):
        return False
    raise ValueError(f"Expected true or false, got: {value}")
