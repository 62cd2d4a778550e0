"""Common types used across the codebase."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol


class PushStrategy(str, Enum):
    """How a branch is pushed to the remote, in fallback order."""
    REGULAR = "regular"
    SET_UPSTREAM = "set-upstream"
    FORCE_WITH_LEASE = "force-with-lease"
    FORCE = "force"


@dataclass(frozen=True)
class PrRef:
    """Reference to a pull request on the review service."""
    number: Optional[int]
    url: Optional[str] = None


class GitInterface(Protocol):
    """What the stack logic expects from version control."""

    def current_branch(self) -> str:
        ...

    def local_branches(self) -> List[str]:
        ...

    def branch_exists_locally(self, branch: str) -> bool:
        ...

    def branch_exists_remotely(self, branch: str) -> bool:
        ...

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        ...

    def commit_count(self, base: str, branch: str) -> int:
        ...

    def commit_messages(self, base: str, branch: str, fmt: str = "%s") -> List[str]:
        ...

    def push(self, branch: str, strategy: PushStrategy) -> bool:
        ...

    def default_branch(self) -> str:
        ...

    def remote_url(self) -> Optional[str]:
        ...


class ReviewService(Protocol):
    """What the PR chain logic expects from the code review service."""

    def is_available(self) -> bool:
        ...

    def is_authenticated(self) -> bool:
        ...

    def find_pr_by_head(self, branch: str, repo: str) -> Optional[PrRef]:
        ...

    def create_pr(self, base: str, head: str, title: str, body: str, repo: str) -> PrRef:
        ...
