"""Tests for committer.workflow module."""

import json

import pytest

from committer.git import GitError
from committer.llm.exceptions import MalformedResponseError, ServiceError
from committer.ui import BranchChoice, CommitChoice
from committer.workflow import (
    CommitWorkflow,
    WorkflowOptions,
    WorkflowState,
)
from tests.fakes import FakeEditor, FakeProvider, FakeRepository, FakeUI

MESSAGE = "feat(auth): add refresh token"

MATCH = json.dumps({"matches": True, "reason": "Same auth feature"})
MISMATCH = json.dumps(
    {"matches": False, "reason": "Unrelated to chat", "suggested_branch": "feat/auth-refresh"}
)
MISMATCH_NO_SUGGESTION = json.dumps({"matches": False, "reason": "Unrelated to chat"})

CHECK = WorkflowOptions(check_alignment=True)


def _workflow(repo, ui, provider=None, options=WorkflowOptions(), editor=None, diagnostic=None):
    kwargs = {}
    if diagnostic is not None:
        kwargs["diagnostic"] = diagnostic
    return CommitWorkflow(
        repo=repo,
        ui=ui,
        editor=editor or FakeEditor(),
        provider=provider,
        options=options,
        **kwargs,
    )


class TestReviewWithoutAlignment:
    """Tests for the review loop without a branch check."""

    def test_commit(self, fake_repo):
        """Test committing the generated message."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])

        result = _workflow(fake_repo, ui).run(MESSAGE, ["auth.py"])

        assert result.state is WorkflowState.COMMITTED
        assert fake_repo.commits == [MESSAGE]
        assert fake_repo.created == []
        assert ui.shown_messages == [MESSAGE]

    def test_branch_option_hidden(self, fake_repo):
        """Test that 'create branch first' is not offered without a check."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])

        _workflow(fake_repo, ui).run(MESSAGE)

        assert ui.branch_option_flags == [False]

    def test_cancel(self, fake_repo):
        """Test cancelling leaves the repository untouched."""
        ui = FakeUI(commit_choices=[CommitChoice.CANCEL])

        result = _workflow(fake_repo, ui).run(MESSAGE)

        assert result.state is WorkflowState.CANCELLED
        assert fake_repo.commits == []
        assert "Cancelled" in ui.notices

    def test_edit_then_commit(self, fake_repo):
        """Test that the edited message is reviewed and committed."""
        ui = FakeUI(commit_choices=[CommitChoice.EDIT, CommitChoice.COMMIT])
        editor = FakeEditor("fix(auth): refresh token rotation\n")

        result = _workflow(fake_repo, ui, editor=editor).run(MESSAGE)

        assert editor.received == [MESSAGE]
        assert ui.shown_messages == [MESSAGE, "fix(auth): refresh token rotation"]
        assert fake_repo.commits == ["fix(auth): refresh token rotation"]
        assert result.message == "fix(auth): refresh token rotation"

    def test_blank_edit_keeps_message(self, fake_repo):
        """Test that saving an empty file keeps the previous message."""
        ui = FakeUI(commit_choices=[CommitChoice.EDIT, CommitChoice.COMMIT])

        _workflow(fake_repo, ui, editor=FakeEditor("   \n")).run(MESSAGE)

        assert fake_repo.commits == [MESSAGE]

    def test_repeated_edits(self, fake_repo):
        """Test that editing can loop any number of times."""
        ui = FakeUI(
            commit_choices=[CommitChoice.EDIT, CommitChoice.EDIT, CommitChoice.CANCEL]
        )
        editor = FakeEditor("feat: one", "feat: two")

        result = _workflow(fake_repo, ui, editor=editor).run(MESSAGE)

        assert editor.received == [MESSAGE, "feat: one"]
        assert result.state is WorkflowState.CANCELLED
        assert result.message == "feat: two"

    def test_auto_commit_skips_prompt(self, fake_repo):
        """Test that auto-commit shows the message and commits."""
        ui = FakeUI()

        result = _workflow(fake_repo, ui, options=WorkflowOptions(auto_commit=True)).run(MESSAGE)

        assert result.state is WorkflowState.COMMITTED
        assert ui.shown_messages == [MESSAGE]
        assert ui.branch_option_flags == []

    def test_commit_failure_propagates(self, fake_repo, mocker):
        """Test that a failing commit surfaces as GitError."""
        mocker.patch.object(fake_repo, "commit", side_effect=GitError("hook rejected"))
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])

        with pytest.raises(GitError):
            _workflow(fake_repo, ui).run(MESSAGE)


class TestAlignmentCheck:
    """Tests for the pre-commit branch alignment check."""

    def test_match_goes_to_review(self, fake_repo):
        """Test that an aligned commit goes straight to review."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])

        result = _workflow(fake_repo, ui, FakeProvider(MATCH), CHECK).run(MESSAGE, ["auth.py"])

        assert result.state is WorkflowState.COMMITTED
        assert result.verdict.matches is True
        assert ui.branch_prompts == []
        assert ui.branch_option_flags == [True]
        assert fake_repo.created == []

    def test_prompt_carries_context(self, fake_repo):
        """Test that branch, history and files reach the classifier."""
        provider = FakeProvider(MATCH)
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])

        _workflow(fake_repo, ui, provider, CHECK).run(MESSAGE, ["auth.py"])

        prompt = provider.prompts[0]
        assert "feat/auth-login" in prompt
        assert "feat(auth): add login" in prompt
        assert "auth.py" in prompt
        assert MESSAGE in prompt

    def test_mismatch_create(self, fake_repo):
        """Test creating the suggested branch on a mismatch."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        result = _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)

        assert ui.branch_prompts == [
            ("feat/auth-login", "feat/auth-refresh", "Unrelated to chat", True)
        ]
        assert fake_repo.created == ["feat/auth-refresh"]
        assert fake_repo.commits == [MESSAGE]
        assert result.created_branch == "feat/auth-refresh"
        assert result.state is WorkflowState.COMMITTED

    def test_mismatch_create_returns_to_review(self, fake_repo):
        """Test that creating a branch from the check does not commit by itself."""
        ui = FakeUI(
            commit_choices=[CommitChoice.CANCEL],
            branch_choices=[BranchChoice.CREATE],
        )
        options = WorkflowOptions(check_alignment=True, commit_after_branch=True)

        result = _workflow(fake_repo, ui, FakeProvider(MISMATCH), options).run(MESSAGE)

        assert result.state is WorkflowState.CANCELLED
        assert fake_repo.created == ["feat/auth-refresh"]
        assert fake_repo.commits == []

    def test_mismatch_skip(self, fake_repo):
        """Test staying on the current branch."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.SKIP],
        )

        result = _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)

        assert fake_repo.created == []
        assert fake_repo.commits == [MESSAGE]
        assert result.created_branch is None
        assert "Continuing on 'feat/auth-login'" in ui.notices

    def test_mismatch_edit_name_then_create(self, fake_repo):
        """Test editing the suggested name before creating it."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.EDIT, BranchChoice.CREATE],
            branch_names=["fix/auth-token-refresh"],
        )

        _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)

        assert fake_repo.created == ["fix/auth-token-refresh"]
        assert ui.branch_prompts[1] == (
            "feat/auth-login", "fix/auth-token-refresh", "Unrelated to chat", False
        )

    def test_mismatch_edit_blank_name_keeps_suggestion(self, fake_repo):
        """Test that an empty edited name keeps the suggestion."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.EDIT, BranchChoice.CREATE],
            branch_names=[""],
        )

        _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)

        assert fake_repo.created == ["feat/auth-refresh"]

    def test_missing_suggestion_is_synthesized(self, fake_repo):
        """Test that a mismatch without suggestion gets an offline name."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        _workflow(fake_repo, ui, FakeProvider(MISMATCH_NO_SUGGESTION), CHECK).run(MESSAGE)

        assert ui.branch_prompts[0][1] == "feat/auth-refresh-token"
        assert fake_repo.created == ["feat/auth-refresh-token"]

    def test_invalid_suggested_branch_falls_back(self, fake_repo):
        """Test that a verdict suggesting an unusable name is not used for git."""
        verdict = json.dumps(
            {"matches": False, "reason": "Unrelated", "suggested_branch": "Feat/Auth Refresh"}
        )
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        _workflow(fake_repo, ui, FakeProvider(verdict), CHECK).run(MESSAGE)

        assert ui.branch_prompts[0][1] == "feat/auth-refresh-token"
        assert fake_repo.created == ["feat/auth-refresh-token"]
        assert "Branch analysis unavailable, using fallback branch name" in ui.notices

    def test_protected_branch_forced_mismatch(self):
        """Test that a match on a protected branch is overridden."""
        repo = FakeRepository(branch="main")
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.SKIP],
        )

        result = _workflow(repo, ui, FakeProvider(MATCH), CHECK).run(MESSAGE)

        assert result.verdict.matches is False
        current, suggested, reason, mismatch = ui.branch_prompts[0]
        assert current == "main"
        assert suggested == "feat/auth-refresh-token"
        assert "protected" in reason
        assert mismatch is True

    def test_protected_branch_auto_branch(self):
        """Test that auto-branch leaves a protected branch even on a match."""
        repo = FakeRepository(branch="master")
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])
        options = WorkflowOptions(check_alignment=True, auto_branch=True)

        _workflow(repo, ui, FakeProvider(MATCH), options).run(MESSAGE)

        assert repo.created == ["feat/auth-refresh-token"]
        assert repo.commits == [MESSAGE]

    def test_auto_branch_creates_suggestion(self, fake_repo):
        """Test that auto-branch creates the branch without asking."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])
        options = WorkflowOptions(check_alignment=True, auto_branch=True)

        result = _workflow(fake_repo, ui, FakeProvider(MISMATCH), options).run(MESSAGE)

        assert ui.branch_prompts == []
        assert fake_repo.created == ["feat/auth-refresh"]
        assert result.created_branch == "feat/auth-refresh"
        assert any("feat/auth-login" in notice for notice in ui.notices)

    def test_auto_branch_on_match_does_nothing(self, fake_repo):
        """Test that auto-branch keeps an aligned commit on its branch."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])
        options = WorkflowOptions(check_alignment=True, auto_branch=True)

        _workflow(fake_repo, ui, FakeProvider(MATCH), options).run(MESSAGE)

        assert fake_repo.created == []
        assert ui.branch_option_flags == [True]

    def test_classifier_failure_with_auto_branch(self, fake_repo):
        """Test that a service failure still yields a synthesized branch."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])
        options = WorkflowOptions(check_alignment=True, auto_branch=True)
        provider = FakeProvider(ServiceError("unreachable"))

        result = _workflow(fake_repo, ui, provider, options).run(MESSAGE)

        assert fake_repo.created == ["feat/auth-refresh-token"]
        assert fake_repo.commits == [MESSAGE]
        assert result.state is WorkflowState.COMMITTED
        assert "Branch analysis unavailable, using fallback branch name" in ui.notices

    def test_malformed_response_prompts_with_fallback(self, fake_repo):
        """Test that an unparseable answer is treated as a mismatch."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.SKIP],
        )

        _workflow(fake_repo, ui, FakeProvider("sure, looks fine"), CHECK).run(MESSAGE)

        assert ui.branch_prompts[0][1] == "feat/auth-refresh-token"
        assert fake_repo.commits == [MESSAGE]

    def test_without_provider(self, fake_repo):
        """Test that the check works offline."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        _workflow(fake_repo, ui, None, CHECK).run("fix login bug")

        assert fake_repo.created == ["feat/login-bug"]

    def test_failure_is_reported_as_diagnostic(self, fake_repo):
        """Test that the absorbed error shows up in verbose output."""
        lines = []
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.SKIP],
        )
        provider = FakeProvider(MalformedResponseError("bad json"))

        _workflow(
            fake_repo, ui, provider, CHECK, diagnostic=lambda label, text: lines.append((label, text))
        ).run(MESSAGE)

        assert any("bad json" in text for _, text in lines)

    def test_branch_creation_failure_propagates(self, fake_repo, mocker):
        """Test that git refusing the branch is not swallowed."""
        mocker.patch.object(
            fake_repo, "create_and_switch_branch", side_effect=GitError("already exists")
        )
        ui = FakeUI(branch_choices=[BranchChoice.CREATE])

        with pytest.raises(GitError):
            _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)


class TestBranchOption:
    """Tests for the "create branch first" option on the review prompt."""

    def test_create_then_review(self, fake_repo):
        """Test creating a branch from the review prompt."""
        provider = FakeProvider(MATCH, "feat/auth-token-rotation")
        ui = FakeUI(
            commit_choices=[CommitChoice.BRANCH, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        result = _workflow(fake_repo, ui, provider, CHECK).run(MESSAGE)

        assert ui.branch_prompts == [
            ("feat/auth-login", "feat/auth-token-rotation", "", False)
        ]
        assert fake_repo.created == ["feat/auth-token-rotation"]
        assert ui.branch_option_flags == [True, False]
        assert fake_repo.commits == [MESSAGE]
        assert result.state is WorkflowState.COMMITTED

    def test_commit_after_branch(self, fake_repo):
        """Test committing right after creating the branch."""
        provider = FakeProvider(MATCH, "feat/auth-token-rotation")
        ui = FakeUI(
            commit_choices=[CommitChoice.BRANCH],
            branch_choices=[BranchChoice.CREATE],
        )
        options = WorkflowOptions(check_alignment=True, commit_after_branch=True)

        result = _workflow(fake_repo, ui, provider, options).run(MESSAGE)

        assert result.state is WorkflowState.COMMITTED
        assert fake_repo.created == ["feat/auth-token-rotation"]
        assert fake_repo.commits == [MESSAGE]
        assert ui.branch_option_flags == [True]

    def test_skip_returns_to_review(self, fake_repo):
        """Test declining the branch from the review prompt."""
        provider = FakeProvider(MATCH, "feat/auth-token-rotation")
        ui = FakeUI(
            commit_choices=[CommitChoice.BRANCH, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.SKIP],
        )

        _workflow(fake_repo, ui, provider, CHECK).run(MESSAGE)

        assert fake_repo.created == []
        assert ui.branch_option_flags == [True, False]

    def test_suggestion_failure_falls_back(self, fake_repo):
        """Test the offline name when the suggestion call fails."""
        provider = FakeProvider(MATCH, ServiceError("timeout"))
        ui = FakeUI(
            commit_choices=[CommitChoice.BRANCH, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        _workflow(fake_repo, ui, provider, CHECK).run(MESSAGE)

        assert fake_repo.created == ["feat/auth-refresh-token"]

    def test_invalid_suggestion_falls_back(self, fake_repo):
        """Test that a chatty branch suggestion is replaced by the offline name."""
        provider = FakeProvider(MATCH, "Sure! Here is a name: Feat/Auth Refresh")
        ui = FakeUI(
            commit_choices=[CommitChoice.BRANCH, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        result = _workflow(fake_repo, ui, provider, CHECK).run(MESSAGE)

        assert ui.branch_prompts[0][1] == "feat/auth-refresh-token"
        assert fake_repo.created == ["feat/auth-refresh-token"]
        assert result.state is WorkflowState.COMMITTED

    def test_suggestion_uses_edited_message(self, fake_repo):
        """Test that the branch is named after the current message."""
        ui = FakeUI(
            commit_choices=[CommitChoice.EDIT, CommitChoice.BRANCH, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )
        editor = FakeEditor("fix(api): timeout handling")
        provider = FakeProvider(MATCH, ServiceError("timeout"))

        _workflow(fake_repo, ui, provider, CHECK, editor=editor).run(MESSAGE)

        assert fake_repo.created == ["fix/api-timeout-handling"]
        assert fake_repo.commits == ["fix(api): timeout handling"]


class TestSingleBranchDecision:
    """Tests that at most one branch decision is made per run."""

    def test_no_branch_option_after_check_decision(self, fake_repo):
        """Test that the review prompt hides 'b' after a decision."""
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT],
            branch_choices=[BranchChoice.SKIP],
        )

        _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)

        assert ui.branch_option_flags == [False]

    def test_branch_choice_ignored_when_unavailable(self, fake_repo):
        """Test that a stray 'b' cannot create a second branch."""
        ui = FakeUI(
            commit_choices=[CommitChoice.BRANCH, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )

        _workflow(fake_repo, ui, FakeProvider(MISMATCH), CHECK).run(MESSAGE)

        assert fake_repo.created == ["feat/auth-refresh"]
        assert len(ui.branch_prompts) == 1
        assert fake_repo.commits == [MESSAGE]

    def test_no_option_after_auto_branch(self, fake_repo):
        """Test that auto-branch counts as the decision."""
        ui = FakeUI(commit_choices=[CommitChoice.COMMIT])
        options = WorkflowOptions(check_alignment=True, auto_branch=True)

        _workflow(fake_repo, ui, FakeProvider(MISMATCH), options).run(MESSAGE)

        assert ui.branch_option_flags == [False]

    def test_run_resets_state(self, fake_repo):
        """Test that a second run starts with a fresh decision."""
        provider = FakeProvider(MISMATCH, MATCH)
        ui = FakeUI(
            commit_choices=[CommitChoice.COMMIT, CommitChoice.COMMIT],
            branch_choices=[BranchChoice.CREATE],
        )
        workflow = _workflow(fake_repo, ui, provider, CHECK)

        first = workflow.run(MESSAGE)
        second = workflow.run("feat(auth): rotate refresh token")

        assert first.created_branch == "feat/auth-refresh"
        assert second.created_branch is None
        assert ui.branch_option_flags == [False, True]
