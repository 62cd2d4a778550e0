"""Error taxonomy for stack submission."""

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes."""
    NOT_A_REPO = "NOT_A_REPO"
    VCS_NOT_AVAILABLE = "VCS_NOT_AVAILABLE"
    REVIEW_SERVICE_NOT_AVAILABLE = "REVIEW_SERVICE_NOT_AVAILABLE"
    REVIEW_SERVICE_NOT_AUTHENTICATED = "REVIEW_SERVICE_NOT_AUTHENTICATED"
    BRANCH_NOT_FOUND = "BRANCH_NOT_FOUND"
    PUSH_FAILED = "PUSH_FAILED"
    PR_CREATION_FAILED = "PR_CREATION_FAILED"
    COMMAND_FAILED = "COMMAND_FAILED"
    ON_TRUNK = "ON_TRUNK"
    UNKNOWN = "UNKNOWN"


class StackSubmitError(Exception):
    """Base class for all stacksubmit errors."""
    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, cause: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class NotARepoError(StackSubmitError):
    code = ErrorCode.NOT_A_REPO

    def __init__(self, cause: Optional[str] = None):
        super().__init__("Not in a git repository", cause)


class VcsNotAvailableError(StackSubmitError):
    code = ErrorCode.VCS_NOT_AVAILABLE

    def __init__(self, cause: Optional[str] = None):
        super().__init__("Git is not installed or not in PATH", cause)


class ReviewServiceNotAvailableError(StackSubmitError):
    code = ErrorCode.REVIEW_SERVICE_NOT_AVAILABLE

    def __init__(self, cause: Optional[str] = None):
        super().__init__("GitHub is not available (no token found)", cause)


class ReviewServiceNotAuthenticatedError(StackSubmitError):
    code = ErrorCode.REVIEW_SERVICE_NOT_AUTHENTICATED

    def __init__(self, cause: Optional[str] = None):
        super().__init__("Not authenticated with GitHub", cause)


class BranchNotFoundError(StackSubmitError):
    code = ErrorCode.BRANCH_NOT_FOUND

    def __init__(self, branch: str):
        super().__init__(f"Branch '{branch}' not found")
        self.branch = branch


class PushFailedError(StackSubmitError):
    code = ErrorCode.PUSH_FAILED

    def __init__(self, branch: str, cause: Optional[str] = None):
        super().__init__(f"Failed to push branch '{branch}'", cause)
        self.branch = branch


class PrCreationError(StackSubmitError):
    code = ErrorCode.PR_CREATION_FAILED

    def __init__(self, branch: str, cause: Optional[str] = None):
        super().__init__(f"Failed to create PR for '{branch}'", cause)
        self.branch = branch


class CommandFailedError(StackSubmitError):
    code = ErrorCode.COMMAND_FAILED

    def __init__(self, command: str, cause: Optional[str] = None):
        super().__init__(f"Command failed: {command}", cause)
        self.command = command


class OnTrunkError(StackSubmitError):
    """Raised when a submission is started from the trunk branch itself."""
    code = ErrorCode.ON_TRUNK

    def __init__(self, branch: str):
        super().__init__(f"Cannot run on base branch '{branch}'. Please switch to a feature branch.")
        self.branch = branch
