"""Stack submission implementation."""

import logging
from dataclasses import dataclass
from typing import Optional

from .. import __version__, pretty
from ..config.models import StackSubmitConfig
from ..errors import OnTrunkError, ReviewServiceNotAuthenticatedError, ReviewServiceNotAvailableError
from ..git.push import PushSummary, push_all_branches
from ..github.pr import PrSummary, create_all_prs
from ..github.prerequisites import check_review_prerequisites
from ..stack import StackInfo, detect_stack
from ..typing import GitInterface, ReviewService

logger = logging.getLogger(__name__)

SCRIPT_NAME = "stack-submit"

MESSAGE_ALL_OK = "✅ Done! Stack pushed and PRs created successfully."
MESSAGE_BOTH_FAILED = "⚠️  Done with issues: Some branches failed to push and some PRs failed to create."
MESSAGE_PUSH_FAILED = "⚠️  Done with issues: Some branches failed to push."
MESSAGE_PR_FAILED = "⚠️  Done with issues: Some PRs failed to create."


def final_message(push_succeeded: bool, pr_succeeded: bool) -> str:
    if push_succeeded and pr_succeeded:
        return MESSAGE_ALL_OK
    if not push_succeeded and not pr_succeeded:
        return MESSAGE_BOTH_FAILED
    if not push_succeeded:
        return MESSAGE_PUSH_FAILED
    return MESSAGE_PR_FAILED


@dataclass
class SubmitOutcome:
    """Everything a submission run produced."""
    stack: StackInfo
    push: PushSummary
    prs: Optional[PrSummary]
    push_succeeded: bool
    pr_succeeded: bool
    message: str


class StackSubmitter:
    """Pushes the current stack and opens chained pull requests."""

    def __init__(self, config: StackSubmitConfig, git_cmd: GitInterface, review: ReviewService):
        """Initialize with config, git and review service clients."""
        self.config = config
        self.git_cmd = git_cmd
        self.review = review

    def resolve_base_branch(self) -> str:
        """Configured base branch, otherwise the detected trunk."""
        if self.config.repo.base_branch:
            return self.config.repo.base_branch
        return self.git_cmd.default_branch()

    def display_stack_summary(self, info: StackInfo) -> None:
        pretty.echo(f"{pretty.CLIPBOARD} Found {len(info.branches)} branch(es) in stack:")
        for branch in info.branches:
            pretty.echo(f"  - {branch.name} ({branch.commit_count} commits from {info.base_branch})")

    def submit(self) -> SubmitOutcome:
        """Run the whole submission.

        Raises:
            NotARepoError: not inside a git repository
            OnTrunkError: the current branch is the base branch
        """
        pretty.echo(f"{SCRIPT_NAME} v{__version__}")

        current_branch = self.git_cmd.current_branch()
        base_branch = self.resolve_base_branch()
        logger.debug(f"current={current_branch} base={base_branch}")

        if current_branch == base_branch:
            raise OnTrunkError(base_branch)

        pretty.echo(f"{pretty.SEARCH} Getting branches in stack...")
        info = detect_stack(self.git_cmd, current_branch, base_branch)
        self.display_stack_summary(info)

        push = push_all_branches(self.git_cmd, info.branch_names(), self.config.user.allow_force_push)

        repo = self.config.repo.full_name
        prs: Optional[PrSummary] = None
        try:
            check_review_prerequisites(self.review, repo, self.config.repo.github_host)
        except (ReviewServiceNotAvailableError, ReviewServiceNotAuthenticatedError) as e:
            logger.debug(f"Skipping PR creation: {e}")
            pr_succeeded = False
        else:
            prs = create_all_prs(self.git_cmd, self.review, base_branch, info.branch_names(), repo)
            pr_succeeded = prs.all_succeeded

        message = final_message(push.all_succeeded, pr_succeeded)
        pretty.echo()
        pretty.echo(message)

        return SubmitOutcome(info, push, prs, push.all_succeeded, pr_succeeded, message)
