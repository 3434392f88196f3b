"""Input resolution.

Decides where this invocation's notification comes from, in priority order:

1. the explicit ``--payload`` argument,
2. JSON piped on stdin by the hook runner,
3. the built-in default.

Then applies the ``--title`` / ``--message`` force overrides, which win over
whatever the payload said.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import IO, TYPE_CHECKING, Optional

from claude_notify.diagnostics import DiagnosticLog, NullDiagnosticLog
from claude_notify.payload.parser import (
    ResolvedNotification,
    default_notification,
    parse_payload,
)

if TYPE_CHECKING:
    from claude_notify.config.settings import NotifyConfig


class InputSource(Enum):
    EXPLICIT = "explicit payload"
    PIPED = "piped input"
    ABSENT = "none"


@dataclass(frozen=True)
class RawInput:
    """The raw payload chosen for this invocation; ``text`` is None when absent."""

    source: InputSource
    text: Optional[str] = None

    @classmethod
    def explicit(cls, text: str) -> "RawInput":
        return cls(InputSource.EXPLICIT, text)

    @classmethod
    def piped(cls, text: str) -> "RawInput":
        return cls(InputSource.PIPED, text)

    @classmethod
    def absent(cls) -> "RawInput":
        return cls(InputSource.ABSENT)


def probe_stdin(stream: Optional[IO], log: Optional[DiagnosticLog] = None) -> Optional[str]:
    """Read piped input if a pipe or file is attached.

    An interactive terminal or a missing/closed stream counts as "nothing
    piped" and is never read, so the process cannot sit waiting on a TTY.
    Once a pipe is attached it is read to EOF with no timeout.

    Args:
        stream: Usually sys.stdin; may be None under pythonw or detached hooks.
        log: Diagnostic sink.

    Returns:
        The piped text, or None if nothing is attached or reading failed.
    """
    log = log or NullDiagnosticLog()
    if stream is None:
        return None

    try:
        if stream.closed or stream.isatty():
            return None
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            # Decode bytes ourselves; the console code page is often not UTF-8 on Windows
            return buffer.read().decode("utf-8-sig", errors="replace")
        return stream.read()
    except (OSError, ValueError, AttributeError) as e:
        # AttributeError: a stream-like object without closed/isatty
        log.log(f"Could not read piped input: {e}")
        return None


def read_raw_input(
    explicit_payload: Optional[str],
    stream: Optional[IO],
    log: Optional[DiagnosticLog] = None,
) -> RawInput:
    """Select the raw payload by priority.

    stdin is not touched at all when an explicit payload is given.
    """
    if explicit_payload and explicit_payload.strip():
        return RawInput.explicit(explicit_payload)

    piped = probe_stdin(stream, log)
    if piped and piped.strip():
        return RawInput.piped(piped)

    return RawInput.absent()


def apply_overrides(
    notification: ResolvedNotification,
    title: Optional[str] = None,
    message: Optional[str] = None,
    log: Optional[DiagnosticLog] = None,
) -> ResolvedNotification:
    """Replace title and/or message with non-empty override values.

    The two overrides are independent of each other. Event kind and metadata
    are left alone.
    """
    log = log or NullDiagnosticLog()
    changes = {}
    if title:
        changes["title"] = title
        log.log(f"Title override: {title}")
    if message:
        changes["message"] = message
        log.log(f"Message override: {message}")
    if not changes:
        return notification
    return dataclasses.replace(notification, **changes)


def resolve_notification(
    config: "NotifyConfig",
    stream: Optional[IO],
    log: Optional[DiagnosticLog] = None,
) -> ResolvedNotification:
    """Produce the final notification for this invocation.

    Args:
        config: Effective configuration (payload and override values).
        stream: Input stream to probe when no explicit payload is given.
        log: Diagnostic sink.

    Returns:
        ResolvedNotification with non-empty title and message.
    """
    log = log or NullDiagnosticLog()

    raw = read_raw_input(config.payload, stream, log)
    log.log(f"Input source: {raw.source.value}")

    if raw.text is not None:
        log.log(f"Raw payload: {' '.join(raw.text.split())}")
        notification = parse_payload(raw.text, log)
    else:
        notification = default_notification()

    notification = apply_overrides(notification, config.title, config.message, log)
    log.log(f"Resolved notification - title: {notification.title}, message: {notification.message}")
    return notification


__all__ = [
    "InputSource",
    "RawInput",
    "probe_stdin",
    "read_raw_input",
    "apply_overrides",
    "resolve_notification",
]
