"""Config module."""

from typing import Dict, Any
from .models import RepoConfig, UserConfig, StackSubmitConfig

class Config(StackSubmitConfig):
    """Config object holding repository and user config.

    Built from the plain dict produced by the config parser.
    """
    def __init__(self, config: Dict[str, Dict[str, Any]]):
        """Initialize with parsed config dict."""
        super().__init__(
            repo=RepoConfig.model_validate(config.get('repo', {})),
            user=UserConfig.model_validate(config.get('user', {})),
        )

def default_config() -> Config:
    """Get default config without parsing git."""
    return Config({
        'repo': {
            'remote': 'origin',
        },
        'user': {
            'allow_force_push': False,
        },
    })
