"""Pydantic models for config types."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class RepoConfig(BaseModel):
    """Repository configuration."""
    model_config = ConfigDict(extra="allow")

    remote: str = "origin"
    base_branch: Optional[str] = None  # Detected from the remote when unset
    github_host: str = "github.com"
    github_repo_owner: Optional[str] = None
    github_repo_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        """owner/name, or empty when either part is unknown."""
        if self.github_repo_owner and self.github_repo_name:
            return f"{self.github_repo_owner}/{self.github_repo_name}"
        return ""

class UserConfig(BaseModel):
    """User configuration."""
    model_config = ConfigDict(extra="allow")

    allow_force_push: bool = False
    log_git_commands: bool = True

class StackSubmitConfig(BaseModel):
    """Full stack-submit configuration."""
    model_config = ConfigDict(extra="allow")

    repo: RepoConfig = Field(default_factory=RepoConfig)
    user: UserConfig = Field(default_factory=UserConfig)
