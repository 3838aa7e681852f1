"""Logging utilities for tilepath.

Provides color-coded output to distinguish routine progress, completions, and
handler failures while agents walk their routes.
"""

import os
from enum import Enum

from .config import Config


class Color(Enum):
    """ANSI color codes for terminal output."""

    # Colors for operation types
    BLUE = "\033[94m"      # Movement commands, leg progress
    RED = "\033[91m"       # Errors, interruptions
    GREEN = "\033[92m"     # Route completion
    CYAN = "\033[96m"      # Info/metadata

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if TILEPATH_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("TILEPATH_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def verbose_enabled() -> bool:
    """Progress lines are opt-in; env var wins over the import-time Config value."""
    return Config.VERBOSE or bool(os.getenv("TILEPATH_VERBOSE"))


def log_progress(message: str) -> None:
    """Log a movement step (blue). Only printed in verbose mode."""
    if verbose_enabled():
        print(colored(f"{LOG_TAG_DETERMINISTIC} {message}", Color.BLUE))


def log_success(message: str) -> None:
    """Log a completed route (green). Only printed in verbose mode."""
    if verbose_enabled():
        print(colored(f"{LOG_TAG_SUCCESS} {message}", Color.GREEN))


def log_info(message: str) -> None:
    """Log metadata/info (cyan). Only printed in verbose mode."""
    if verbose_enabled():
        print(colored(f"{LOG_TAG_INFO} {message}", Color.CYAN))


def log_error(message: str) -> None:
    """Log an error (red). Always printed."""
    print(colored(f"{LOG_TAG_ERROR} {message}", Color.RED))


# Markers for operation types (color-blind accessible)
LOG_TAG_DETERMINISTIC = "[•]"  # Movement/bookkeeping step
LOG_TAG_ERROR = "[!]"          # Error/interruption
LOG_TAG_SUCCESS = "[✓]"        # Success
LOG_TAG_INFO = "[i]"           # Information
