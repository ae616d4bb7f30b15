"""Prompt templates sent to the completion service."""

# System prompt for commit message generation
SYSTEM_PROMPT = """You are an expert software engineer writing git commit messages.
Be precise: only describe changes actually shown in the diff."""

COMMIT_MESSAGE_PROMPT_TEMPLATE = """Write a git commit message for the staged changes below.

Rules:
- First line: Conventional Commits header "type(scope): description"
  * type is one of: feat, fix, docs, refactor, perf, test, build, ci, chore, style, revert
  * scope is the area of code affected (auth, ui, api, ...); omit "(scope)" if unclear
  * description in imperative mood, lowercase, no period, header <=72 chars
- Optionally a blank line followed by 1-5 short "- " bullets explaining what changed and why.
- Only describe changes shown in the diff. Do not infer or assume other changes.
- Output ONLY the commit message. No markdown fences. No commentary.

FILES CHANGED:
{files_changed}

STAGED DIFF:
{diff}"""

BRANCH_ALIGNMENT_PROMPT_TEMPLATE = """You are a git branch analyzer. Determine if the current commit belongs on this branch.

CURRENT BRANCH: {current_branch}

RECENT COMMITS ON THIS BRANCH:
{recent_commits}

FILES BEING CHANGED IN THIS COMMIT:
{files_changed}

NEW COMMIT MESSAGE:
{commit_message}

ANALYSIS RULES:
1. Protected branches ({protected_branches}) - NEVER match, always suggest a feature branch
2. The commit scope/module MUST relate to the branch name. Example: branch "feat/auth-login" should only have auth-related commits, NOT unrelated features like "feat(db): add migration"
3. Different commit TYPES (feat, fix, refactor, docs, test) on the SAME feature are fine - e.g., feat/auth can have "feat(auth): add login" then "fix(auth): handle edge case" then "docs(auth): add comments"
4. If the commit introduces a NEW scope/module not mentioned in the branch name, flag as MISMATCH
5. Be STRICT: when in doubt, flag as mismatch. It's better to suggest a new branch than pollute an existing one with unrelated work

BRANCH NAMING CONVENTION: <type>/<scope>-<short-description>
Examples: feat/auth-refresh-token, fix/ui-chat-scroll, refactor/server-ws-reconnect

Respond with ONLY valid JSON:
- If matches: {{"matches": true, "reason": "brief explanation"}}
- If mismatch: {{"matches": false, "reason": "brief explanation", "suggested_branch": "type/scope-description"}}"""

BRANCH_SUGGESTION_PROMPT_TEMPLATE = """Given this commit message, suggest an appropriate git branch name.

COMMIT MESSAGE:
{commit_message}

BRANCH NAMING RULES:
1. Use format: <type>/<scope>-<short-description>
2. Type should match the commit type (feat, fix, docs, refactor, test, chore, etc.)
3. Scope is the area/module being changed (auth, ui, server, api, etc.)
4. Description should be kebab-case, concise (2-4 words)
5. Keep the full branch name under 50 characters when possible

BRANCH NAMING CONVENTION: <type>/<scope>-<short-description>
Examples: feat/auth-refresh-token, fix/ui-chat-scroll, refactor/server-ws-reconnect

Respond with ONLY the branch name, nothing else."""
