"""Unit tests for chained PR creation."""

from stacksubmit.github.pr import (
    PrOutcome,
    create_all_prs,
    create_pr_for_branch,
    format_body,
    format_title,
)
from stacksubmit.typing import PrRef
from stacksubmit.tests.fakes import FakeGit, FakeReview

REPO = "octo/widgets"


def linear_stack() -> FakeGit:
    """main -> f1 -> f2 -> f3, everything pushed."""
    return (FakeGit()
            .branch("f1", "main")
            .branch("f2", "f1")
            .branch("f3", "f2")
            .publish("f1", "f2", "f3"))


class TestFormatting:
    """Tests for PR title and body formatting."""

    def test_title_is_oldest_message(self) -> None:
        assert format_title("f1", ["first", "second"]) == "first"

    def test_title_falls_back_to_branch_name(self) -> None:
        assert format_title("f1", []) == "f1"

    def test_body_lists_commits_under_heading(self) -> None:
        assert format_body(["first", "second"]) == "## Commits\n\n- first\n- second"

    def test_body_empty_without_commits(self) -> None:
        assert format_body([]) == ""


class TestCreatePrForBranch:
    """Tests for create_pr_for_branch."""

    def test_creates_pr_with_unique_commits_only(self) -> None:
        git_cmd = FakeGit().branch("f1", "main", commits=2).branch("f2", "f1", commits=2).publish("f1", "f2")
        review = FakeReview()

        result = create_pr_for_branch(git_cmd, review, "f2", "f1", REPO)

        assert result.outcome == PrOutcome.CREATED
        assert result.pr_number == 1
        assert result.pr_url == f"https://github.com/{REPO}/pull/1"
        created = review.created[0]
        assert (created.base, created.head) == ("f1", "f2")
        assert created.title == "f2 commit 1"
        assert created.body == "## Commits\n\n- f2 commit 1\n- f2 commit 2"

    def test_not_pushed_skips_without_chain_update(self) -> None:
        git_cmd = FakeGit().branch("f1", "main")
        review = FakeReview()

        result = create_pr_for_branch(git_cmd, review, "f1", "main", REPO)

        assert result.outcome == PrOutcome.SKIPPED_NO_CHAIN_UPDATE
        assert result.message == "Branch not pushed yet"
        assert not result.outcome.updates_chain
        assert review.created == []

    def test_same_as_base_skips_without_chain_update(self) -> None:
        git_cmd = FakeGit()
        review = FakeReview()

        result = create_pr_for_branch(git_cmd, review, "main", "main", REPO)

        assert result.outcome == PrOutcome.SKIPPED_NO_CHAIN_UPDATE
        assert result.message == "Same as base branch"

    def test_remote_check_error_fails(self) -> None:
        git_cmd = linear_stack()
        git_cmd.remote_check_errors.add("f1")

        result = create_pr_for_branch(git_cmd, FakeReview(), "f1", "main", REPO)

        assert result.outcome == PrOutcome.FAILED
        assert "ls-remote" in result.message

    def test_existing_pr_is_reused(self) -> None:
        git_cmd = linear_stack()
        review = FakeReview(prs={"f1": PrRef(7, "https://github.com/octo/widgets/pull/7")})

        result = create_pr_for_branch(git_cmd, review, "f1", "main", REPO)

        assert result.outcome == PrOutcome.ALREADY_EXISTS
        assert result.pr_number == 7
        assert review.created == []

    def test_no_commits_skips_with_chain_update(self) -> None:
        git_cmd = FakeGit().branch("f1", "main").branch("f2", "f1", commits=0).publish("f1", "f2")

        result = create_pr_for_branch(git_cmd, FakeReview(), "f2", "f1", REPO)

        assert result.outcome == PrOutcome.SKIPPED_CHAIN_UPDATE
        assert result.outcome.updates_chain
        assert result.message == "No commits compared to f1"

    def test_commit_count_error_fails(self) -> None:
        git_cmd = linear_stack()
        git_cmd.failing_counts.add("f2")

        result = create_pr_for_branch(git_cmd, FakeReview(), "f2", "f1", REPO)

        assert result.outcome == PrOutcome.FAILED

    def test_create_error_fails(self) -> None:
        git_cmd = linear_stack()
        review = FakeReview(failing_heads={"f1"})

        result = create_pr_for_branch(git_cmd, review, "f1", "main", REPO)

        assert result.outcome == PrOutcome.FAILED
        assert result.message == "Validation Failed"


class TestCreateAllPrs:
    """Tests for create_all_prs."""

    def test_prs_are_chained(self) -> None:
        git_cmd = linear_stack()
        review = FakeReview()

        summary = create_all_prs(git_cmd, review, "main", ["f1", "f2", "f3"], REPO)

        assert summary.all_succeeded
        assert [(c.head, c.base) for c in review.created] == [("f1", "main"), ("f2", "f1"), ("f3", "f2")]
        assert [c.title for c in review.created] == ["f1 commit 1", "f2 commit 1", "f3 commit 1"]

    def test_zero_commit_branch_still_anchors_chain(self) -> None:
        """f2 has nothing over f1, yet f3 must target f2 rather than f1."""
        git_cmd = (FakeGit()
                   .branch("f1", "main")
                   .branch("f2", "f1", commits=0)
                   .branch("f3", "f2")
                   .publish("f1", "f2", "f3"))
        review = FakeReview()

        summary = create_all_prs(git_cmd, review, "main", ["f1", "f2", "f3"], REPO)

        outcomes = [r.outcome for r in summary.results]
        assert outcomes == [PrOutcome.CREATED, PrOutcome.SKIPPED_CHAIN_UPDATE, PrOutcome.CREATED]
        assert review.created[-1].head == "f3"
        assert review.created[-1].base == "f2"
        assert summary.all_succeeded

    def test_unpushed_branch_does_not_anchor_chain(self) -> None:
        git_cmd = (FakeGit()
                   .branch("f1", "main")
                   .branch("f2", "f1")
                   .branch("f3", "f2")
                   .publish("f1", "f3"))
        review = FakeReview()

        summary = create_all_prs(git_cmd, review, "main", ["f1", "f2", "f3"], REPO)

        assert summary.results[1].outcome == PrOutcome.SKIPPED_NO_CHAIN_UPDATE
        assert review.created[-1].head == "f3"
        assert review.created[-1].base == "f1"
        assert review.created[-1].body == "## Commits\n\n- f2 commit 1\n- f3 commit 1"

    def test_second_run_creates_nothing(self) -> None:
        git_cmd = linear_stack()
        review = FakeReview()

        create_all_prs(git_cmd, review, "main", ["f1", "f2", "f3"], REPO)
        second = create_all_prs(git_cmd, review, "main", ["f1", "f2", "f3"], REPO)

        assert len(review.created) == 3
        assert [r.outcome for r in second.results] == [PrOutcome.ALREADY_EXISTS] * 3
        assert second.all_succeeded

    def test_failure_continues_and_still_anchors(self) -> None:
        git_cmd = linear_stack()
        review = FakeReview(failing_heads={"f2"})

        summary = create_all_prs(git_cmd, review, "main", ["f1", "f2", "f3"], REPO)

        assert not summary.all_succeeded
        assert [r.outcome for r in summary.results] == [PrOutcome.CREATED, PrOutcome.FAILED, PrOutcome.CREATED]
        assert review.created[-1].base == "f2"

    def test_missing_repo_name_fails_immediately(self) -> None:
        git_cmd = linear_stack()
        review = FakeReview()

        summary = create_all_prs(git_cmd, review, "main", ["f1"], "")

        assert not summary.all_succeeded
        assert summary.results == []
        assert review.created == []
