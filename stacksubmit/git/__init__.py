"""Git interfaces and implementation."""

import os
import logging
from typing import List, Optional, Tuple
import git
from git.exc import GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError
from ..typing import GitInterface, PushStrategy
from ..config.models import StackSubmitConfig
from ..errors import CommandFailedError, NotARepoError, VcsNotAvailableError

# Get module logger
logger = logging.getLogger(__name__)

__all__ = ["GitInterface", "RealGit", "TRUNK_CANDIDATES"]

# Checked in order when the remote has no HEAD symref
TRUNK_CANDIDATES = ("main", "master")
FALLBACK_TRUNK = "master"

# git ls-remote --exit-code exits with 2 when no matching refs were found
LS_REMOTE_NOT_FOUND = 2

class RealGit:
    """Real Git implementation backed by GitPython."""
    def __init__(self, config: StackSubmitConfig, working_dir: Optional[str] = None):
        """Initialize with config."""
        self.config: StackSubmitConfig = config
        self.working_dir = working_dir
        self._repo: Optional[git.Repo] = None

    @property
    def remote(self) -> str:
        return self.config.repo.remote

    @property
    def repo(self) -> git.Repo:
        """The GitPython repository, opened on first use."""
        if self._repo is None:
            path = self.working_dir or os.getcwd()
            try:
                self._repo = git.Repo(path, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise NotARepoError(str(e)) from e
        return self._repo

    def execute(self, *args: str) -> Tuple[int, str, str]:
        """Run a git command and return (status, stdout, stderr) without raising on failure."""
        cmd_str = " ".join(args)
        if self.config.user.log_git_commands:
            logger.info(f"> git {cmd_str}")
        else:
            logger.debug(f"> git {cmd_str}")
        try:
            status, stdout, stderr = self.repo.git.execute(
                ["git", *args], with_extended_output=True, with_exceptions=False
            )
        except GitCommandNotFound as e:
            raise VcsNotAvailableError(str(e)) from e
        if status != 0:
            logger.debug(f"git {cmd_str} exited with {status}: {stderr}")
        return status, stdout, stderr

    def must_git(self, *args: str) -> str:
        """Run git command, raising CommandFailedError on error."""
        status, stdout, stderr = self.execute(*args)
        if status != 0:
            raise CommandFailedError(f"git {' '.join(args)}", stderr or "Unknown error")
        return stdout

    def current_branch(self) -> str:
        status, stdout, stderr = self.execute("rev-parse", "--abbrev-ref", "HEAD")
        if status != 0:
            raise NotARepoError(stderr or None)
        branch = stdout.strip()
        if branch == "HEAD":
            raise NotARepoError("HEAD is detached")
        return branch

    def local_branches(self) -> List[str]:
        status, stdout, _ = self.execute("branch", "--format=%(refname:short)")
        if status != 0 or not stdout:
            return []
        return [line.strip() for line in stdout.splitlines() if line.strip()]

    def branch_exists_locally(self, branch: str) -> bool:
        status, _, _ = self.execute("show-ref", "--verify", "--quiet", f"refs/heads/{branch}")
        return status == 0

    def branch_exists_remotely(self, branch: str) -> bool:
        status, _, stderr = self.execute("ls-remote", "--exit-code", "--heads", self.remote, branch)
        if status == 0:
            return True
        if status == LS_REMOTE_NOT_FOUND:
            return False
        # Anything else is a transport or auth problem, not a missing branch
        raise CommandFailedError("git ls-remote", stderr or "Unknown error")

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        status, _, _ = self.execute("merge-base", "--is-ancestor", ancestor, descendant)
        return status == 0

    def commit_count(self, base: str, branch: str) -> int:
        output = self.must_git("rev-list", "--count", f"{base}..{branch}")
        try:
            return int(output.strip())
        except ValueError:
            raise CommandFailedError("git rev-list", f"Invalid count output: {output}")

    def commit_messages(self, base: str, branch: str, fmt: str = "%s") -> List[str]:
        """Messages of commits in branch but not base, oldest first."""
        status, stdout, _ = self.execute("log", "--reverse", f"--format={fmt}", f"{base}..{branch}")
        if status != 0 or not stdout:
            return []
        return [line for line in stdout.splitlines() if line]

    def push(self, branch: str, strategy: PushStrategy) -> bool:
        args = ["push"]
        if strategy == PushStrategy.SET_UPSTREAM:
            args.append("-u")
        elif strategy == PushStrategy.FORCE_WITH_LEASE:
            args.append("--force-with-lease")
        elif strategy == PushStrategy.FORCE:
            args.append("--force")
        args.extend([self.remote, branch])
        status, _, _ = self.execute(*args)
        return status == 0

    def default_branch(self) -> str:
        """Detect the trunk: remote HEAD, then a well-known name, then master."""
        prefix = f"refs/remotes/{self.remote}/"
        status, stdout, _ = self.execute("symbolic-ref", f"{prefix}HEAD")
        if status == 0 and stdout:
            branch = stdout.strip().replace(prefix, "", 1)
            if branch:
                return branch

        for trunk in TRUNK_CANDIDATES:
            if self.branch_exists_locally(trunk):
                return trunk
            try:
                if self.branch_exists_remotely(trunk):
                    return trunk
            except CommandFailedError as e:
                logger.debug(f"Could not check remote for {trunk}: {e}")

        return FALLBACK_TRUNK

    def remote_url(self) -> Optional[str]:
        status, stdout, _ = self.execute("config", "--get", f"remote.{self.remote}.url")
        if status != 0 or not stdout:
            return None
        return stdout.strip()
