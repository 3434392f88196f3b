"""Claude Notify - desktop notifications for Claude Code hooks.

Resolves a notification from a hook payload (argument or stdin) and shows it
through the first working backend in a per-platform fallback chain.
"""

from claude_notify._version import __version__
from claude_notify.cli import create_parser, main, print_version, run

__all__ = [
    "__version__",
    "create_parser",
    "main",
    "print_version",
    "run",
]
