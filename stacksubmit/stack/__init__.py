"""Stack detection.

A stack is the chain of local branches that lead from the trunk to the
current branch. Branches are ordered by how far ahead of the trunk they are,
so the branch closest to the trunk comes first.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..errors import CommandFailedError
from ..typing import GitInterface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Branch:
    """A local branch and how many commits it is ahead of the trunk."""
    name: str
    commit_count: int


@dataclass(frozen=True)
class StackInfo:
    """Snapshot of the stack for one run."""
    base_branch: str
    current_branch: str
    branches: Tuple[Branch, ...]

    def branch_names(self) -> List[str]:
        return [b.name for b in self.branches]


def find_stack_branches(git_cmd: GitInterface, current_branch: str, base_branch: str) -> List[Branch]:
    """Find all branches in the current stack, earliest in the stack first.

    A branch other than ``current_branch`` belongs to the stack when it is an
    ancestor of ``current_branch`` and has at least one commit that the trunk
    does not. ``current_branch`` is always included.

    A branch whose commit count cannot be read is left out of the result
    rather than failing the whole detection.
    """
    candidates: List[str] = [current_branch]

    for other in git_cmd.local_branches():
        if other == base_branch or other == current_branch:
            continue
        if not git_cmd.is_ancestor(other, current_branch):
            logger.debug(f"  {other}: not an ancestor of {current_branch}")
            continue
        try:
            ahead = git_cmd.commit_count(base_branch, other)
        except CommandFailedError as e:
            logger.warning(f"Dropping {other} from stack: {e}")
            continue
        if ahead > 0:
            candidates.append(other)
        else:
            logger.debug(f"  {other}: no commits beyond {base_branch}")

    branches: List[Branch] = []
    for name in candidates:
        try:
            branches.append(Branch(name, git_cmd.commit_count(base_branch, name)))
        except CommandFailedError as e:
            logger.warning(f"Dropping {name} from stack: {e}")

    # sorted() is stable, so ties keep discovery order
    return sorted(branches, key=lambda b: b.commit_count)


def detect_stack(git_cmd: GitInterface, current_branch: str, base_branch: str) -> StackInfo:
    """Build the StackInfo snapshot for a run."""
    branches = find_stack_branches(git_cmd, current_branch, base_branch)
    return StackInfo(base_branch, current_branch, tuple(branches))
