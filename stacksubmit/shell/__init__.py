"""External command execution."""

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Conventional shell exit codes
EXIT_NOT_FOUND = 127
EXIT_TIMEOUT = 124


@dataclass
class CommandResult:
    """Outcome of a finished external command."""
    exit_code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def run_cmd(command: str, args: List[str], cwd: Optional[str] = None,
            env: Optional[Dict[str, str]] = None, timeout: Optional[float] = None) -> CommandResult:
    """Run an external command without a shell.

    Never raises on a non-zero exit; the caller inspects ``exit_code``.
    A missing executable is reported as exit code 127 and a timeout as 124.
    """
    full_env = None
    if env:
        full_env = dict(os.environ)
        full_env.update(env)

    logger.debug(f"Running command: {command} {' '.join(args)}")
    try:
        proc = subprocess.run(
            [command, *args], cwd=cwd, env=full_env, timeout=timeout,
            capture_output=True, text=True, check=False
        )
    except FileNotFoundError as e:
        return CommandResult(EXIT_NOT_FOUND, "", str(e))
    except subprocess.TimeoutExpired:
        return CommandResult(EXIT_TIMEOUT, "", f"{command} timed out after {timeout}s")

    result = CommandResult(proc.returncode, (proc.stdout or "").strip(), (proc.stderr or "").strip())
    if result.stderr:
        logger.debug(f"Command stderr: {result.stderr}")
    return result


def command_exists(command: str) -> bool:
    """Check if a command exists in PATH."""
    return shutil.which(command) is not None
