"""Chained pull request creation.

Each branch in the stack gets a PR whose base is the branch before it, so
every PR shows only the commits that branch adds on top of its parent.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .. import pretty
from ..errors import CommandFailedError, PrCreationError
from ..typing import GitInterface, ReviewService

logger = logging.getLogger(__name__)

COMMITS_HEADING = "## Commits"


class PrOutcome(str, Enum):
    """What happened when processing one branch of the chain."""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    # Branch is not part of the chain yet (not pushed, or is the base itself)
    SKIPPED_NO_CHAIN_UPDATE = "skipped_no_chain_update"
    # Branch has nothing to review but still anchors the next PR
    SKIPPED_CHAIN_UPDATE = "skipped_chain_update"
    FAILED = "failed"

    @property
    def updates_chain(self) -> bool:
        return self is not PrOutcome.SKIPPED_NO_CHAIN_UPDATE


@dataclass
class PrCreationResult:
    """Result of processing one branch."""
    branch: str
    outcome: PrOutcome
    message: str
    pr_number: Optional[int] = None
    pr_url: Optional[str] = None


@dataclass
class PrSummary:
    """Aggregate result of creating the PR chain."""
    all_succeeded: bool = True
    results: List[PrCreationResult] = field(default_factory=list)


def format_title(branch: str, messages: Sequence[str]) -> str:
    """Oldest unique commit subject, or the branch name when there are none."""
    return messages[0] if messages else branch


def format_body(messages: Sequence[str]) -> str:
    """Markdown list of commit subjects under a heading, or empty."""
    if not messages:
        return ""
    lines = "\n".join(f"- {m}" for m in messages)
    return f"{COMMITS_HEADING}\n\n{lines}"


def create_pr_for_branch(git_cmd: GitInterface, review: ReviewService,
                         branch: str, pr_base: str, repo: str) -> PrCreationResult:
    """Create (or find) the PR for branch targeting pr_base."""
    try:
        exists_remotely = git_cmd.branch_exists_remotely(branch)
    except CommandFailedError as e:
        pretty.echo(pretty.warning(f"Failed to check if {branch} exists remotely: {e}"))
        return PrCreationResult(branch, PrOutcome.FAILED, str(e))
    if not exists_remotely:
        pretty.echo(pretty.skip(f"Skipping {branch} (not pushed yet)"))
        return PrCreationResult(branch, PrOutcome.SKIPPED_NO_CHAIN_UPDATE, "Branch not pushed yet")

    if branch == pr_base:
        pretty.echo(pretty.skip(f"Skipping {branch} (same as base branch)"))
        return PrCreationResult(branch, PrOutcome.SKIPPED_NO_CHAIN_UPDATE, "Same as base branch")

    existing = review.find_pr_by_head(branch, repo)
    if existing is not None and existing.number:
        pretty.echo(f"{pretty.SUCCESS} PR #{existing.number} already exists for {branch} -> {pr_base}")
        if existing.url:
            pretty.echo(pretty.detail(existing.url))
        return PrCreationResult(branch, PrOutcome.ALREADY_EXISTS, "PR already exists",
                                pr_number=existing.number, pr_url=existing.url)

    try:
        commit_count = git_cmd.commit_count(pr_base, branch)
    except CommandFailedError as e:
        pretty.echo(pretty.warning(f"Failed to get commit count for {branch}: {e}"))
        return PrCreationResult(branch, PrOutcome.FAILED, str(e))

    if commit_count == 0:
        pretty.echo(pretty.skip(f"Skipping {branch} (no commits compared to {pr_base})"))
        return PrCreationResult(branch, PrOutcome.SKIPPED_CHAIN_UPDATE, f"No commits compared to {pr_base}")

    messages = git_cmd.commit_messages(pr_base, branch, "%s")
    title = format_title(branch, messages)
    body = format_body(messages)

    pretty.echo(f"{pretty.CREATE} Creating PR for {branch} -> {pr_base} ({commit_count} commit(s))")
    try:
        created = review.create_pr(base=pr_base, head=branch, title=title, body=body, repo=repo)
    except PrCreationError as e:
        pretty.echo(pretty.warning(f"Failed to create PR for {branch}"))
        pretty.echo(pretty.detail(f"Error: {e.cause or e.message}"))
        return PrCreationResult(branch, PrOutcome.FAILED, e.cause or e.message)

    pretty.echo(pretty.success(f"Created PR for {branch}"))
    if created.url:
        pretty.echo(pretty.detail(created.url))
    return PrCreationResult(branch, PrOutcome.CREATED, "PR created successfully",
                            pr_number=created.number, pr_url=created.url)


def create_all_prs(git_cmd: GitInterface, review: ReviewService, base_branch: str,
                   branches: Sequence[str], repo: str) -> PrSummary:
    """Create chained PRs for every branch in the stack.

    The first processed branch targets base_branch; every later branch
    targets the last branch whose outcome updates the chain.
    """
    if not repo:
        pretty.echo(pretty.warning("Could not determine repository name"))
        return PrSummary(all_succeeded=False)

    pretty.echo()
    pretty.echo(f"{pretty.ROCKET} Creating PRs for each branch in the stack...")

    summary = PrSummary()
    previous_branch: Optional[str] = None
    for branch in branches:
        pr_base = previous_branch or base_branch
        result = create_pr_for_branch(git_cmd, review, branch, pr_base, repo)
        logger.debug(f"pr {branch} -> {pr_base}: {result.outcome.value}")
        summary.results.append(result)

        if result.outcome is PrOutcome.FAILED:
            summary.all_succeeded = False
        if result.outcome.updates_chain:
            previous_branch = branch

    if not summary.all_succeeded:
        pretty.echo()
        pretty.echo(f"{pretty.WARNING} Some PRs failed to create.")

    return summary
