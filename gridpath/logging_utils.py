"""Logging utilities for gridpath runs.

Provides color-coded console output so search work, replay progress and
failures are easy to tell apart when watching a run in a terminal.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Deterministic work (search, grid edits)
    YELLOW = "\033[93m"    # Replay progress
    RED = "\033[91m"       # Errors and rejected requests
    GREEN = "\033[92m"     # Success/completion
    CYAN = "\033[96m"      # Info/metadata

    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply

    Returns:
        Colorized text if GRIDPATH_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("GRIDPATH_NO_COLOR"):
        return text

    return f"{color.value}{text}{Color.RESET.value}"


def is_verbose() -> bool:
    """Return True when per-event replay logging is requested."""
    return os.getenv("GRIDPATH_VERBOSE", "").lower() in ("1", "true", "yes")


def log_error(message: str) -> None:
    """Log an error or rejected request (red)."""
    print(colored(message, Color.RED))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    print(colored(message, Color.CYAN))


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_REPLAY = "[>]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
