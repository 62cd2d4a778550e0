"""Shared utilities for stacksubmit tests."""
import subprocess
from typing import Optional
import logging

logger = logging.getLogger(__name__)

def run_cmd(cmd: str, cwd: Optional[str] = None, check: bool = True) -> str:
    """Run shell command and return output.

    Args:
        cmd: Command to run
        cwd: Working directory
        check: Whether to check return code

    Returns:
        str: Command output
    """
    logger.debug(f"Running command: {cmd}")
    result = subprocess.run(
        cmd, shell=True, check=check, cwd=cwd,
        capture_output=True, text=True
    )
    logger.debug(f"Command output: {result.stdout.strip()}")
    if result.stderr:
        logger.debug(f"Command stderr: {result.stderr.strip()}")
    return result.stdout.strip()
