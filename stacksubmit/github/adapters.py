"""Adapter classes to wrap PyGithub objects with our protocol interfaces."""

from typing import List
import logging

from github import Github
from github.Repository import Repository
from github.PullRequest import PullRequest as PyGithubPullRequest
from github.GithubObject import NotSet

from . import (
    PyGithubProtocol,
    GitHubRepoProtocol,
    GitHubPullRequestProtocol,
    GitHubRefProtocol,
    GitHubUserProtocol,
)

logger = logging.getLogger(__name__)


class PyGithubPullRequestAdapter(GitHubPullRequestProtocol):
    """Adapter for PyGithub PullRequest objects."""

    def __init__(self, pr: PyGithubPullRequest) -> None:
        self._pr = pr

    @property
    def number(self) -> int:
        return self._pr.number

    @property
    def html_url(self) -> str:
        return self._pr.html_url

    @property
    def base(self) -> GitHubRefProtocol:
        return self._pr.base

    @property
    def head(self) -> GitHubRefProtocol:
        return self._pr.head


class PyGithubRepoAdapter(GitHubRepoProtocol):
    """Adapter for PyGithub Repository objects."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def get_pulls(self, state: str = "open", head: str = "", base: str = "") -> List[GitHubPullRequestProtocol]:
        """Get pull requests with optional filtering."""
        # PyGithub wants NotSet rather than empty strings
        pulls = self._repo.get_pulls(
            state=state,
            head=head if head else NotSet,
            base=base if base else NotSet
        )
        return [PyGithubPullRequestAdapter(pr) for pr in pulls]

    def create_pull(self, title: str, body: str, base: str, head: str) -> GitHubPullRequestProtocol:
        """Create a new pull request."""
        pr = self._repo.create_pull(title=title, body=body, base=base, head=head)
        return PyGithubPullRequestAdapter(pr)


class PyGithubAdapter(PyGithubProtocol):
    """Adapter for the main PyGithub object."""

    def __init__(self, github: Github) -> None:
        self._github = github

    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        """Get a repository by full name."""
        return PyGithubRepoAdapter(self._github.get_repo(full_name_or_id))

    def get_user(self) -> GitHubUserProtocol:
        """Get the authenticated user."""
        return self._github.get_user()
