"""Config parser logic."""

import os
import re
from typing import Any, Dict, Mapping, Optional, Tuple
import logging
import yaml

from ...typing import GitInterface

# Get module logger
logger = logging.getLogger(__name__)

RepoConfig = Dict[str, Any]  # Use Any since yaml can return various types
Config = Dict[str, RepoConfig]

CONFIG_FILE = '.stack-submit.yaml'

def parse_bool_env(value: Optional[str]) -> bool:
    """Parse a boolean environment variable ("1" or "true")."""
    if value is None:
        return False
    return value == "1" or value.lower() == "true"

def parse_repo_name(remote_url: str, host: str = "github.com") -> Optional[Tuple[str, str]]:
    """Extract (owner, name) from an https or ssh remote URL."""
    match = re.search(rf'{re.escape(host)}[:/]([^/]+)/([^/]+?)(?:\.git)?/?$', remote_url.strip())
    if not match:
        return None
    return match.group(1), match.group(2)

def parse_config(git_cmd: GitInterface, environ: Optional[Mapping[str, str]] = None,
                 repo_root: Optional[str] = None) -> Config:
    """Parse config from defaults, the repo config file, the environment and the git remote.

    The config file is looked up in repo_root, or the current directory when
    repo_root is not given.
    """
    env = os.environ if environ is None else environ
    config: Config = {
        'repo': {
            'remote': 'origin',
            'base_branch': None,
            'github_host': 'github.com',
        },
        'user': {
            'allow_force_push': False,
            'log_git_commands': True,
        },
    }

    try:
        with open(os.path.join(repo_root or os.curdir, CONFIG_FILE), 'r') as f:
            logger.info(f"Found {CONFIG_FILE}, loading...")
            file_config = yaml.safe_load(f)
            logger.debug(f"Config from {CONFIG_FILE}: {file_config}")
            if file_config:
                if isinstance(file_config.get('repo'), dict):
                    config['repo'].update(file_config['repo'])
                if isinstance(file_config.get('user'), dict):
                    config['user'].update(file_config['user'])
    except FileNotFoundError:
        logger.debug(f"No {CONFIG_FILE} found, using defaults")

    if 'ALLOW_FORCE_PUSH' in env:
        config['user']['allow_force_push'] = parse_bool_env(env.get('ALLOW_FORCE_PUSH'))

    if not config['repo'].get('github_repo_owner') or not config['repo'].get('github_repo_name'):
        owner_name: Optional[Tuple[str, str]] = None
        remote_url = git_cmd.remote_url()
        if remote_url:
            owner_name = parse_repo_name(remote_url, config['repo']['github_host'])
            if owner_name is None:
                logger.warning(f"Could not parse repository from remote URL {remote_url}")
        if owner_name is None and env.get('GITHUB_REPOSITORY'):
            parts = env['GITHUB_REPOSITORY'].split('/')
            if len(parts) == 2 and all(parts):
                owner_name = (parts[0], parts[1])
        if owner_name:
            if not config['repo'].get('github_repo_owner'):
                config['repo']['github_repo_owner'] = owner_name[0]
            if not config['repo'].get('github_repo_name'):
                config['repo']['github_repo_name'] = owner_name[1]

    return config
