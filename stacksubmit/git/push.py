"""Pushing stack branches with fallback strategies."""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .. import pretty
from ..errors import CommandFailedError
from ..typing import GitInterface, PushStrategy

logger = logging.getLogger(__name__)


@dataclass
class PushResult:
    """Result of pushing one branch."""
    branch: str
    success: bool
    strategy: PushStrategy
    message: str


@dataclass
class PushSummary:
    """Aggregate result of pushing a stack."""
    all_succeeded: bool = True
    results: List[PushResult] = field(default_factory=list)


def push_branch(git_cmd: GitInterface, branch: str, allow_force_push: bool = False) -> PushResult:
    """Push a single branch, falling back through progressively stronger strategies.

    Order: regular, then set-upstream when the branch is new on the remote,
    otherwise force-with-lease, then plain force only if ``allow_force_push``.
    """
    if not git_cmd.branch_exists_locally(branch):
        pretty.echo(pretty.skip(f"Skipping {branch} (branch doesn't exist locally)"))
        return PushResult(branch, False, PushStrategy.REGULAR, "Branch doesn't exist locally")

    pretty.echo(f"{pretty.PUSH} Pushing {branch}...")

    try:
        exists_remotely = git_cmd.branch_exists_remotely(branch)
    except CommandFailedError as e:
        pretty.echo(pretty.warning(f"Failed to check if {branch} exists remotely: {e}"))
        exists_remotely = False

    if git_cmd.push(branch, PushStrategy.REGULAR):
        pretty.echo(pretty.success(f"Pushed {branch}"))
        return PushResult(branch, True, PushStrategy.REGULAR, "Pushed successfully")

    if not exists_remotely:
        if git_cmd.push(branch, PushStrategy.SET_UPSTREAM):
            pretty.echo(pretty.success(f"Pushed {branch} (set upstream)"))
            return PushResult(branch, True, PushStrategy.SET_UPSTREAM, "Pushed with upstream set")
        pretty.echo(pretty.warning(f"Failed to push {branch} (set upstream failed)"))
        return PushResult(branch, False, PushStrategy.SET_UPSTREAM, "Failed to push with upstream set")

    if git_cmd.push(branch, PushStrategy.FORCE_WITH_LEASE):
        pretty.echo(pretty.success(f"Force-pushed {branch} (with lease)"))
        return PushResult(branch, True, PushStrategy.FORCE_WITH_LEASE, "Force-pushed with lease")

    if allow_force_push:
        if git_cmd.push(branch, PushStrategy.FORCE):
            pretty.echo(pretty.success(f"Force-pushed {branch}"))
            return PushResult(branch, True, PushStrategy.FORCE, "Force-pushed")
        pretty.echo(pretty.warning(f"Failed to push {branch} (even with force)"))
        return PushResult(branch, False, PushStrategy.FORCE, "Failed to force push")

    pretty.echo(pretty.warning(
        f"Failed to push {branch} (force-with-lease failed; set ALLOW_FORCE_PUSH=1 to allow regular force push)"
    ))
    return PushResult(branch, False, PushStrategy.FORCE_WITH_LEASE,
                      "Force-with-lease failed; set ALLOW_FORCE_PUSH=1 to allow force push")


def push_all_branches(git_cmd: GitInterface, branches: Sequence[str],
                      allow_force_push: bool = False) -> PushSummary:
    """Push every branch in order. A failure never stops the remaining pushes."""
    pretty.echo()
    pretty.echo(f"{pretty.PUSH} Pushing branches to remote...")

    summary = PushSummary()
    for branch in branches:
        result = push_branch(git_cmd, branch, allow_force_push)
        logger.debug(f"push {branch}: success={result.success} strategy={result.strategy.value}")
        summary.results.append(result)
        if not result.success:
            summary.all_succeeded = False

    if not summary.all_succeeded:
        pretty.echo()
        pretty.echo(f"{pretty.WARNING} Some branches failed to push. Continuing with PR creation...")

    return summary
