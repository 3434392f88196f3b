"""Categorized error handling with actionable messages.

Provides structured error types with exit codes and recovery suggestions
for hook runners and shell scripts that check the exit status.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Exit codes for scripting integration.

    - 0: A backend delivered the notification
    - 1: Every backend in the chain failed
    """

    SUCCESS = 0
    DELIVERY_FAILED = 1


class ClaudeNotifyError(Exception):
    """Base exception for claude-notify with structured error info.

    Attributes:
        message: Human-readable error message.
        code: Exit code for scripting.
        suggestion: Actionable recovery suggestion.
        details: Optional additional context.
    """

    code: ClassVar[ExitCode] = ExitCode.DELIVERY_FAILED
    suggestion: ClassVar[str] = ""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: str | None = None,
    ):
        self.message = message
        self._suggestion = suggestion
        self.details = details
        super().__init__(message)

    def get_suggestion(self) -> str:
        """Get the recovery suggestion."""
        return self._suggestion or self.suggestion

    def format_full(self) -> str:
        """Format the complete error message with suggestion."""
        parts = [f"Error: {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        suggestion = self.get_suggestion()
        if suggestion:
            parts.append(f"Suggestion: {suggestion}")
        return "\n".join(parts)


class PayloadError(ClaudeNotifyError):
    """Hook payload could not be decoded.

    Only raised inside the payload parser, which downgrades it to the
    built-in default notification.
    """


class ConfigError(ClaudeNotifyError):
    """Configuration file error.

    Reported as a warning; the invocation continues with default settings.
    """

    suggestion = (
        "Fix or delete ~/.claude/.notify_config.json "
        "(or the file named by CLAUDE_NOTIFY_CONFIG)."
    )


class DeliveryFailedError(ClaudeNotifyError):
    """No backend in the fallback chain could show the notification."""

    code = ExitCode.DELIVERY_FAILED
    suggestion = (
        "Run with --log-path to see why each backend failed, "
        "or use --list-backends to check which ones are available."
    )


def format_error_for_user(error: Exception, verbose: bool = False) -> str:
    """Format any exception for user display.

    Args:
        error: Exception to format.
        verbose: If True, include details and suggestions.

    Returns:
        Formatted error message string.
    """
    if isinstance(error, ClaudeNotifyError):
        if verbose:
            return error.format_full()
        return f"Error: {error.message}"
    else:
        return f"Error: {error}"


def get_exit_code(error: Exception) -> int:
    """Get the exit code for an exception.

    Args:
        error: Exception to get code for.

    Returns:
        Integer exit code.
    """
    if isinstance(error, ClaudeNotifyError):
        return error.code
    return ExitCode.DELIVERY_FAILED


__all__ = [
    "ExitCode",
    "ClaudeNotifyError",
    "PayloadError",
    "ConfigError",
    "DeliveryFailedError",
    "format_error_for_user",
    "get_exit_code",
]
