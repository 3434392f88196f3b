"""Terminal color handling and detection.

Provides ANSI color codes for progress output with automatic
detection of color support.
"""

import os
import platform
import sys


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"


def supports_color() -> bool:
    """Check if the terminal supports color output.

    Returns:
        True if colors should be displayed, False otherwise.
    """
    # NO_COLOR (https://no-color.org) and our own switch, any non-empty value
    if os.environ.get("NO_COLOR") or os.environ.get("CLAUDE_NOTIFY_NO_COLOR"):
        return False
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    if platform.system() == "Windows":
        return bool(os.environ.get("TERM") or os.environ.get("WT_SESSION"))
    return True


def disable_colors() -> None:
    """Blank out every color code so output is plain text."""
    for attr in dir(Colors):
        if not attr.startswith("_"):
            setattr(Colors, attr, "")


def init_colors() -> None:
    """Initialize colors based on terminal support.

    Disables all color codes if the terminal doesn't support colors.
    """
    if not supports_color():
        disable_colors()


# Auto-initialize on import
init_colors()

__all__ = ["Colors", "supports_color", "init_colors", "disable_colors"]
