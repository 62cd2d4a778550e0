"""Pretty formatting utilities for CLI output."""

import sys
from typing import IO, Optional

SUCCESS = "✅"
WARNING = "⚠️ "
SKIP = "⏭️ "
ERROR = "❌"
PUSH = "\U0001f4e4"
SEARCH = "\U0001f50d"
CLIPBOARD = "\U0001f4cb"
CREATE = "\U0001f4dd"
ROCKET = "\U0001f680"


def success(text: str) -> str:
    return f"   {SUCCESS} {text}"


def warning(text: str) -> str:
    return f"   {WARNING} {text}"


def skip(text: str) -> str:
    return f"   {SKIP} {text}"


def error(text: str) -> str:
    return f"{ERROR} {text}"


def detail(text: str) -> str:
    """Indented continuation line under a status line."""
    return f"   {text}"


def echo(text: str = "", file: Optional[IO[str]] = None) -> None:
    """Print a line to file (default stdout)."""
    if file is None:
        file = sys.stdout
    print(text, file=file)
