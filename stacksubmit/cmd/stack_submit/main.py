"""CLI entry point."""

import os
import sys
import click
import logging
from typing import Any, Dict, Optional, Tuple
from click import Context

from ... import pretty, setup_logging
from ...config import Config, default_config
from ...config.config_parser import parse_config
from ...errors import NotARepoError, OnTrunkError, StackSubmitError
from ...git import RealGit
from ...github import create_github_client
from ...submit import StackSubmitter

# Get module logger
logger = logging.getLogger(__name__)

class AliasedGroup(click.Group):
    """Command group with support for aliases."""

    def __init__(self, name: Optional[str] = None, commands: Optional[Dict[str, click.Command]] = None, **attrs: Any) -> None:
        """Initialize with aliases map."""
        super().__init__(name, commands, **attrs)
        self.aliases: Dict[str, str] = {}

    def add_alias(self, alias: str, command: str) -> None:
        """Add an alias for a command."""
        self.aliases[alias] = command

    def get_command(self, ctx: Context, cmd_name: str) -> Optional[click.Command]:
        """Get a command by name, supporting aliases."""
        if cmd_name in self.aliases:
            cmd_name = self.aliases[cmd_name]
        return super().get_command(ctx, cmd_name)

def setup_git(directory: Optional[str] = None) -> Tuple[Config, RealGit]:
    """Setup Git command and config.

    Raises:
        NotARepoError: directory is not inside a git repository
    """
    if directory:
        os.chdir(directory)

    git_cmd = RealGit(default_config())
    # Opening the repo raises NotARepoError outside a work tree
    root = git_cmd.repo.working_tree_dir

    config = Config(parse_config(git_cmd, repo_root=str(root) if root else None))
    return config, RealGit(config)

def run_submit(directory: Optional[str], verbose: int, allow_force_push: bool,
               base: Optional[str]) -> None:
    """Run a submission and exit with the right code.

    Fatal guards (not a repository, running on the trunk) exit 1. Partial
    push or PR failures are reported but still exit 0.
    """
    setup_logging(verbose)

    try:
        config, git_cmd = setup_git(directory)
        if allow_force_push:
            config.user.allow_force_push = True
        if base:
            config.repo.base_branch = base
        github = create_github_client(config)
        StackSubmitter(config, git_cmd, github).submit()
    except (NotARepoError, OnTrunkError) as e:
        pretty.echo(pretty.error(str(e)), file=sys.stderr)
        sys.exit(1)
    except StackSubmitError as e:
        pretty.echo()
        pretty.echo(pretty.error(str(e)), file=sys.stderr)
        logger.debug("Submission failed", exc_info=True)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error during submit: {e}")
        logger.debug("Submission failed", exc_info=True)
        sys.exit(1)

submit_options = [
    click.option('-C', '--directory', type=click.Path(exists=True, file_okay=False, dir_okay=True),
                 help='Run as if stack-submit was started in DIRECTORY instead of the current working directory'),
    click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)"),
    click.option('--allow-force-push', is_flag=True, default=False,
                 help="Fall back to a plain force push when force-with-lease fails (same as ALLOW_FORCE_PUSH=1)"),
    click.option('--base', type=str, default=None,
                 help="Base (trunk) branch of the stack; detected from the remote when omitted"),
]

def with_submit_options(func: Any) -> Any:
    for option in reversed(submit_options):
        func = option(func)
    return func

def merged_options(ctx: Context, directory: Optional[str], verbose: int,
                   allow_force_push: bool, base: Optional[str]) -> Tuple[Optional[str], int, bool, Optional[str]]:
    """Combine group-level options with the subcommand's; the subcommand wins when set."""
    group = ctx.obj or {}
    return (
        directory or group.get('directory'),
        verbose or group.get('verbose', 0),
        allow_force_push or group.get('allow_force_push', False),
        base or group.get('base'),
    )

@click.group(cls=AliasedGroup, invoke_without_command=True)
@with_submit_options
@click.pass_context
def cli(ctx: Context, directory: Optional[str], verbose: int, allow_force_push: bool, base: Optional[str]) -> None:
    """stack-submit - push a stack of branches and open chained pull requests."""
    ctx.obj = {
        'directory': directory,
        'verbose': verbose,
        'allow_force_push': allow_force_push,
        'base': base,
    }
    if ctx.invoked_subcommand is None:
        run_submit(directory, verbose, allow_force_push, base)

@cli.command(name="submit", help="Push every branch in the current stack and create chained pull requests")
@with_submit_options
@click.pass_context
def submit(ctx: Context, directory: Optional[str], verbose: int, allow_force_push: bool, base: Optional[str]) -> None:
    """Submit command."""
    run_submit(*merged_options(ctx, directory, verbose, allow_force_push, base))

cli.add_alias('sub', 'submit')

def main() -> None:
    """Main entry point."""
    cli(obj={})

if __name__ == "__main__":
    main()
