"""GitHub interfaces and implementation."""

import os
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol, runtime_checkable

import requests
import yaml
from github import GithubException

from ..config.models import StackSubmitConfig
from ..errors import PrCreationError
from ..shell import command_exists, run_cmd
from ..typing import PrRef

# Get module logger
logger = logging.getLogger(__name__)

# Define protocols for GitHub objects
@runtime_checkable
class GitHubUserProtocol(Protocol):
    """Protocol for GitHub user objects (real or fake)."""
    @property
    def login(self) -> str:
        """Get the user's login name."""
        ...

@runtime_checkable
class GitHubRefProtocol(Protocol):
    """Protocol for GitHub ref objects (base/head references)."""
    @property
    def ref(self) -> str:
        """Get the ref name (e.g., 'main', 'feature-branch')."""
        ...

@runtime_checkable
class GitHubPullRequestProtocol(Protocol):
    """Protocol for GitHub pull request objects (real or fake)."""
    @property
    def number(self) -> int:
        """Get the PR number."""
        ...

    @property
    def html_url(self) -> str:
        """Get the PR web URL."""
        ...

    @property
    def base(self) -> GitHubRefProtocol:
        """Get the base reference."""
        ...

    @property
    def head(self) -> GitHubRefProtocol:
        """Get the head reference."""
        ...

@runtime_checkable
class GitHubRepoProtocol(Protocol):
    """Protocol for GitHub repository objects (real or fake)."""
    def get_pulls(self, state: str = "open", head: str = "", base: str = "") -> List[GitHubPullRequestProtocol]:
        """Get pull requests with optional filtering."""
        ...

    def create_pull(self, title: str, body: str, base: str, head: str) -> GitHubPullRequestProtocol:
        """Create a new pull request."""
        ...

@runtime_checkable
class PyGithubProtocol(Protocol):
    """Protocol for PyGithub implementations (real or fake).

    Both the real PyGithub library (through the adapters) and the test
    fake satisfy it.
    """
    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        """Get a repository by full name."""
        ...

    def get_user(self) -> GitHubUserProtocol:
        """Get the authenticated user."""
        ...

def find_github_token() -> Optional[str]:
    """Find GitHub token from env vars, the gh CLI, or the gh CLI config file."""
    for var in ("GITHUB_TOKEN", "GH_TOKEN"):
        token = os.environ.get(var)
        if token:
            return token

    # gh keeps tokens in the system keyring by default; ask it directly
    if command_exists("gh"):
        result = run_cmd("gh", ["auth", "token"], timeout=10)
        if result.ok and result.stdout:
            return result.stdout

    try:
        gh_config_path = Path.home() / ".config" / "gh" / "hosts.yml"
        if gh_config_path.exists():
            with open(gh_config_path, "r") as f:
                gh_config = yaml.safe_load(f)
                if gh_config and "github.com" in gh_config:
                    github_config: Dict[str, object] = gh_config["github.com"]
                    token = github_config.get("oauth_token")
                    if isinstance(token, str) and token:
                        return token
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error reading gh CLI config: {e}")

    return None


class GitHubClient:
    """Review service backed by the GitHub API."""
    def __init__(self, config: StackSubmitConfig, github_client: Optional[PyGithubProtocol] = None):
        """Initialize with config and GitHub client implementation.

        Args:
            config: The configuration
            github_client: GitHub client implementation (real or fake).
                           None means no token was found; the service then
                           reports itself as unavailable.
        """
        self.config = config
        self.client = github_client
        self._repos: Dict[str, GitHubRepoProtocol] = {}

    def is_available(self) -> bool:
        return self.client is not None

    def is_authenticated(self) -> bool:
        if self.client is None:
            return False
        try:
            login = self.client.get_user().login
        except (GithubException, requests.RequestException) as e:
            logger.debug(f"GitHub authentication check failed: {e}")
            return False
        logger.debug(f"Authenticated to GitHub as {login}")
        return bool(login)

    def get_repo(self, repo: str) -> GitHubRepoProtocol:
        """Get (and cache) a repository by owner/name."""
        if self.client is None:
            raise RuntimeError("GitHub client not configured - check token")
        if repo not in self._repos:
            self._repos[repo] = self.client.get_repo(repo)
        return self._repos[repo]

    def find_pr_by_head(self, branch: str, repo: str) -> Optional[PrRef]:
        """Find the open pull request whose head is branch."""
        owner = repo.split("/")[0]
        head_filter = f"{owner}:{branch}"
        logger.info(f"> github find pr head={head_filter}")
        try:
            pulls = list(self.get_repo(repo).get_pulls(state="open", head=head_filter))
        except (GithubException, requests.RequestException) as e:
            logger.error(f"Error getting PR for branch {branch}: {e}")
            return None

        logger.debug(f"GitHub API returned {len(pulls)} PRs for head filter {head_filter}")
        for pr in pulls:
            if pr.head.ref == branch:
                return PrRef(pr.number, pr.html_url)
        return None

    def create_pr(self, base: str, head: str, title: str, body: str, repo: str) -> PrRef:
        """Create a pull request, raising PrCreationError on failure."""
        logger.info(f"> github create {head} -> {base} : {title}")
        try:
            pr = self.get_repo(repo).create_pull(title=title, body=body, base=base, head=head)
        except (GithubException, requests.RequestException) as e:
            data = getattr(e, "data", None)
            message = data.get("message") if isinstance(data, dict) else None
            raise PrCreationError(head, message or str(e)) from e
        return PrRef(pr.number, pr.html_url)


def create_github_client(config: StackSubmitConfig) -> GitHubClient:
    """Create a GitHubClient using the real PyGithub library."""
    from github import Auth, Github
    from .adapters import PyGithubAdapter

    token = find_github_token()
    if not token:
        logger.debug("No GitHub token found")
        return GitHubClient(config, None)

    host = config.repo.github_host
    if host == "github.com":
        real_github = Github(auth=Auth.Token(token))
    else:
        real_github = Github(base_url=f"https://{host}/api/v3", auth=Auth.Token(token))
    return GitHubClient(config, github_client=PyGithubAdapter(real_github))
