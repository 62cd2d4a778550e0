"""Fixtures for end-to-end tests against real git repositories."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, List, Tuple

import pytest

from stacksubmit.config import Config
from stacksubmit.git import RealGit
from stacksubmit.github import GitHubClient
from stacksubmit.submit import StackSubmitter, SubmitOutcome
from stacksubmit.tests.e2e.fake_pygithub import FakeGithub, FakeRepository
from stacksubmit.tests.utils import run_cmd

log = logging.getLogger(__name__)

OWNER = "octo"
NAME = "widgets"


@dataclass
class RepoContext:
    """Test repository context with helpers for test operations."""
    repo_dir: str
    remote_dir: str
    config: Config
    git_cmd: RealGit
    fake_github: FakeGithub
    github: GitHubClient

    def run(self, cmd: str, check: bool = True) -> str:
        return run_cmd(cmd, cwd=self.repo_dir, check=check)

    def make_commit(self, file: str, content: str, msg: str) -> str:
        """Write file, commit it and return the new HEAD hash."""
        with open(os.path.join(self.repo_dir, file), "w") as f:
            f.write(f"{content}\n")
        self.run(f"git add {file}")
        self.run(f'git commit -q -m "{msg}"')
        return self.run("git rev-parse HEAD")

    def create_branch(self, name: str, *messages: str) -> None:
        """Branch off HEAD and add one commit per message."""
        self.run(f"git checkout -q -b {name}")
        for i, msg in enumerate(messages):
            self.make_commit(f"{name}_{i}.txt", msg, msg)

    def checkout(self, name: str) -> None:
        self.run(f"git checkout -q {name}")

    def remote_branches(self) -> List[str]:
        output = run_cmd("git for-each-ref --format='%(refname:short)' refs/heads", cwd=self.remote_dir)
        return [line for line in output.splitlines() if line]

    def remote_sha(self, branch: str) -> str:
        return run_cmd(f"git rev-parse refs/heads/{branch}", cwd=self.remote_dir)

    def fake_repo(self) -> FakeRepository:
        return self.fake_github.get_repo(f"{OWNER}/{NAME}")

    def submit(self, **user: object) -> SubmitOutcome:
        for key, value in user.items():
            setattr(self.config.user, key, value)
        return StackSubmitter(self.config, self.git_cmd, self.github).submit()


def init_repo(tmp_path: Path) -> Tuple[str, str]:
    """Create a working repo on main with a bare origin that knows main."""
    remote_dir = tmp_path / "origin.git"
    repo_dir = tmp_path / "work"
    remote_dir.mkdir()
    repo_dir.mkdir()

    run_cmd("git init -q --bare", cwd=str(remote_dir))
    run_cmd("git init -q", cwd=str(repo_dir))
    run_cmd("git config user.name 'Test User'", cwd=str(repo_dir))
    run_cmd("git config user.email 'test@example.com'", cwd=str(repo_dir))
    run_cmd("git config commit.gpgsign false", cwd=str(repo_dir))
    run_cmd("git symbolic-ref HEAD refs/heads/main", cwd=str(repo_dir))
    (repo_dir / "README.md").write_text("# widgets\n")
    run_cmd("git add README.md", cwd=str(repo_dir))
    run_cmd('git commit -q -m "Initial commit"', cwd=str(repo_dir))
    run_cmd(f"git remote add origin {remote_dir}", cwd=str(repo_dir))
    run_cmd("git push -q -u origin main", cwd=str(repo_dir))
    run_cmd("git remote set-head origin main", cwd=str(repo_dir))
    return str(repo_dir), str(remote_dir)


@pytest.fixture
def repo_ctx(tmp_path: Path) -> Generator[RepoContext, None, None]:
    """Fresh repository, bare origin and fake GitHub for one test."""
    repo_dir, remote_dir = init_repo(tmp_path)
    config = Config({
        'repo': {
            'remote': 'origin',
            'github_repo_owner': OWNER,
            'github_repo_name': NAME,
        },
        'user': {
            'allow_force_push': False,
        },
    })
    git_cmd = RealGit(config, working_dir=repo_dir)
    fake_github = FakeGithub(remote_dir=remote_dir)
    github = GitHubClient(config, github_client=fake_github)
    log.info(f"Test repo at {repo_dir}, origin at {remote_dir}")
    yield RepoContext(repo_dir, remote_dir, config, git_cmd, fake_github, github)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """The CLI replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
