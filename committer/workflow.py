"""Interactive commit workflow.

Drives one run from a generated commit message to a commit (or a
cancel), with an optional branch alignment check up front and a
"create branch first" detour from the review prompt.

States:
    REVIEWING_MESSAGE         commit / cancel / edit / create branch first
    EDITING_MESSAGE           message replaced via the text editor
    CREATING_BRANCH           branch name suggested (LLM, else offline)
    AWAITING_BRANCH_DECISION  create / skip / edit name
    COMMITTED, CANCELLED      terminal

At most one branch decision is made per run; once made, the review
prompt no longer offers to create a branch.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import AbstractSet, Callable, Optional, Sequence

from committer.alignment import (
    AlignmentVerdict,
    classify_alignment,
    enforce_protected_branch,
)
from committer.config import PROTECTED_BRANCHES, RECENT_COMMIT_COUNT
from committer.git.repository import GitRepository
from committer.llm import suggest_branch_name
from committer.llm.base import BaseLLMProvider
from committer.llm.exceptions import LLMError
from committer.naming import synthesize_branch_name
from committer.ui import BranchChoice, CommitChoice, TextEditor, WorkflowUI


class WorkflowState(Enum):
    """States of the commit workflow."""

    REVIEWING_MESSAGE = "reviewing_message"
    AWAITING_BRANCH_DECISION = "awaiting_branch_decision"
    EDITING_MESSAGE = "editing_message"
    CREATING_BRANCH = "creating_branch"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({WorkflowState.COMMITTED, WorkflowState.CANCELLED})


class ProposalOrigin(Enum):
    """Where a pending branch proposal came from."""

    ALIGNMENT_CHECK = "alignment_check"
    BRANCH_OPTION = "branch_option"


@dataclass(frozen=True)
class BranchProposal:
    """A branch name waiting for the user's create/skip decision."""

    current_branch: str
    suggested_branch: str
    reason: str
    show_mismatch_header: bool
    origin: ProposalOrigin


@dataclass(frozen=True)
class WorkflowOptions:
    """Options for one workflow run.

    Attributes:
        check_alignment: Run the branch alignment check before review.
        auto_branch: Create the suggested branch on a mismatch without asking.
        auto_commit: Commit without the review prompt.
        commit_after_branch: Commit right after a branch is created via the
            "create branch first" option.
        recent_commit_count: Number of recent commits given to the classifier.
        protected_branches: Branches that never receive direct commits.
    """

    check_alignment: bool = False
    auto_branch: bool = False
    auto_commit: bool = False
    commit_after_branch: bool = False
    recent_commit_count: int = RECENT_COMMIT_COUNT
    protected_branches: AbstractSet[str] = PROTECTED_BRANCHES


@dataclass(frozen=True)
class WorkflowResult:
    """Outcome of a workflow run."""

    state: WorkflowState
    message: str
    created_branch: Optional[str] = None
    verdict: Optional[AlignmentVerdict] = None


def _no_diagnostics(label: str, text: str) -> None:
    pass


class CommitWorkflow:
    """State machine for reviewing a message and committing it.

    Args:
        repo: Version-control capability.
        ui: Prompts and notifications.
        editor: Text edit capability used for message edits.
        provider: Completion service for alignment checks and branch
            suggestions. Without one, branch names are synthesized offline.
        options: Run options.
        diagnostic: Called with (label, text) for verbose output.
    """

    def __init__(
        self,
        repo: GitRepository,
        ui: WorkflowUI,
        editor: TextEditor,
        provider: Optional[BaseLLMProvider] = None,
        options: WorkflowOptions = WorkflowOptions(),
        diagnostic: Callable[[str, str], None] = _no_diagnostics,
    ) -> None:
        self.repo = repo
        self.ui = ui
        self.editor = editor
        self.provider = provider
        self.options = options
        self.diagnostic = diagnostic

        self.message = ""
        self._changed_files: list[str] = []
        self._branch_resolved = False
        self._proposal: Optional[BranchProposal] = None
        self._created_branch: Optional[str] = None
        self._verdict: Optional[AlignmentVerdict] = None

    def run(self, message: str, changed_files: Sequence[str] = ()) -> WorkflowResult:
        """Run the workflow until the message is committed or cancelled.

        Args:
            message: The generated commit message.
            changed_files: Paths staged for this commit.

        Returns:
            The terminal state, final message and any branch created.

        Raises:
            GitError: If a git operation fails.
        """
        self.message = message
        self._changed_files = list(changed_files)
        self._branch_resolved = False
        self._proposal = None
        self._created_branch = None
        self._verdict = None

        handlers = {
            WorkflowState.REVIEWING_MESSAGE: self._review_message,
            WorkflowState.EDITING_MESSAGE: self._edit_message,
            WorkflowState.CREATING_BRANCH: self._prepare_branch,
            WorkflowState.AWAITING_BRANCH_DECISION: self._decide_branch,
        }

        if self.options.check_alignment:
            state = self._check_alignment()
        else:
            state = WorkflowState.REVIEWING_MESSAGE

        while state not in TERMINAL_STATES:
            state = handlers[state]()

        return WorkflowResult(
            state=state,
            message=self.message,
            created_branch=self._created_branch,
            verdict=self._verdict,
        )

    @property
    def branch_option_available(self) -> bool:
        """Whether the review prompt offers "create branch first"."""
        return self.options.check_alignment and not self._branch_resolved

    # ------------------------------------------------------------------
    # Alignment check
    # ------------------------------------------------------------------

    def _check_alignment(self) -> WorkflowState:
        current_branch = self.repo.current_branch()
        verdict = self._classify(current_branch)
        verdict = enforce_protected_branch(
            verdict, current_branch, self.options.protected_branches
        )
        self._verdict = verdict
        self.diagnostic("Branch Analysis", verdict.reason)

        if verdict.matches:
            return WorkflowState.REVIEWING_MESSAGE

        suggested = verdict.suggested_branch or self._synthesize()

        if self.options.auto_branch:
            self.ui.info(f"Branch '{current_branch}' → '{suggested}' ({verdict.reason})")
            self._create_branch(suggested)
            self._branch_resolved = True
            return WorkflowState.REVIEWING_MESSAGE

        self._proposal = BranchProposal(
            current_branch=current_branch,
            suggested_branch=suggested,
            reason=verdict.reason,
            show_mismatch_header=True,
            origin=ProposalOrigin.ALIGNMENT_CHECK,
        )
        return WorkflowState.AWAITING_BRANCH_DECISION

    def _classify(self, current_branch: str) -> AlignmentVerdict:
        # Classification errors are absorbed here, and only here: the run
        # continues as a mismatch and the branch name is synthesized offline.
        if self.provider is None:
            return AlignmentVerdict(matches=False, reason="Branch alignment check unavailable")

        try:
            return classify_alignment(
                self.provider,
                current_branch,
                self.message,
                self._changed_files,
                self.repo.recent_commits(self.options.recent_commit_count),
                self.options.protected_branches,
            )
        except LLMError as e:
            self.ui.warn("Branch analysis unavailable, using fallback branch name")
            self.diagnostic("Branch Analysis", f"check failed, using fallback branch name: {e}")
            return AlignmentVerdict(matches=False, reason="Branch alignment check unavailable")

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _review_message(self) -> WorkflowState:
        self.ui.show_message(self.message)
        if self.options.auto_commit:
            return self._commit()

        choice = self.ui.choose_commit_action(self.branch_option_available)

        if choice is CommitChoice.COMMIT:
            return self._commit()
        if choice is CommitChoice.CANCEL:
            self.ui.info("Cancelled")
            return WorkflowState.CANCELLED
        if choice is CommitChoice.EDIT:
            return WorkflowState.EDITING_MESSAGE
        if not self.branch_option_available:
            return WorkflowState.REVIEWING_MESSAGE
        return WorkflowState.CREATING_BRANCH

    def _edit_message(self) -> WorkflowState:
        edited = self.editor.edit(self.message)
        if edited.strip():
            self.message = edited.strip()
        return WorkflowState.REVIEWING_MESSAGE

    def _prepare_branch(self) -> WorkflowState:
        suggested = self._suggest_branch()
        current_branch = self.repo.current_branch()
        self.ui.info(f"Suggested branch: {suggested}")

        self._proposal = BranchProposal(
            current_branch=current_branch,
            suggested_branch=suggested,
            reason="",
            show_mismatch_header=False,
            origin=ProposalOrigin.BRANCH_OPTION,
        )
        return WorkflowState.AWAITING_BRANCH_DECISION

    def _suggest_branch(self) -> str:
        # Suggestion failures are absorbed: the offline name is always usable.
        if self.provider is None:
            return self._synthesize()

        try:
            return suggest_branch_name(self.provider, self.message)
        except LLMError as e:
            self.diagnostic("Branch Suggestion", f"failed, using fallback branch name: {e}")
            return self._synthesize()

    def _decide_branch(self) -> WorkflowState:
        proposal = self._proposal
        choice = self.ui.choose_branch_action(
            proposal.current_branch,
            proposal.suggested_branch,
            proposal.reason,
            proposal.show_mismatch_header,
        )

        if choice is BranchChoice.EDIT:
            name = self.ui.prompt_branch_name(proposal.suggested_branch)
            self._proposal = replace(
                proposal,
                suggested_branch=name or proposal.suggested_branch,
                show_mismatch_header=False,
            )
            return WorkflowState.AWAITING_BRANCH_DECISION

        self._proposal = None
        self._branch_resolved = True

        if choice is BranchChoice.SKIP:
            self.ui.info(f"Continuing on '{proposal.current_branch}'")
            return WorkflowState.REVIEWING_MESSAGE

        self._create_branch(proposal.suggested_branch)
        if proposal.origin is ProposalOrigin.BRANCH_OPTION and self.options.commit_after_branch:
            return self._commit()
        return WorkflowState.REVIEWING_MESSAGE

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _synthesize(self) -> str:
        return synthesize_branch_name(self.message)

    def _create_branch(self, name: str) -> None:
        self.repo.create_and_switch_branch(name)
        self._created_branch = name
        self.ui.success(f"Switched to branch '{name}'")

    def _commit(self) -> WorkflowState:
        self.repo.commit(self.message)
        self.ui.success("Committed")
        return WorkflowState.COMMITTED
