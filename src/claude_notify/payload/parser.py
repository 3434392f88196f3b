"""Hook payload decoding.

Turns the JSON text a Claude Code hook sends into a ``ResolvedNotification``.
Decoding goes through ``HookPayload``, a schema where every field is
optional, and the title/message are then chosen per event kind:

    Notification -> payload message, else "Notification"
    Stop         -> "Session completed" (or the continuing text when
                    stop_hook_active is true)
    other name   -> payload message, else "Event: <name>"
    no name      -> payload title/message, else "Manual notification"

``parse_payload`` never raises. Anything it cannot decode is logged and
replaced by the built-in default notification.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from claude_notify.diagnostics import DiagnosticLog, NullDiagnosticLog
from claude_notify.errors import PayloadError

DEFAULT_TITLE = "Claude Code"
DEFAULT_MESSAGE = "Notification"
MANUAL_MESSAGE = "Manual notification"
STOP_MESSAGE = "Session completed"
STOP_CONTINUING_MESSAGE = "Session continuing from previous stop"

EVENT_NOTIFICATION = "Notification"
EVENT_STOP = "Stop"


class EventKind(Enum):
    """Classification of an incoming payload."""

    NOTIFICATION = "Notification"
    STOP = "Stop"
    OTHER = "Other"
    MANUAL = "Manual"
    DEFAULT = "Default"


@dataclass
class ResolvedNotification:
    """The notification that will be shown, plus hook metadata.

    ``event_name`` holds the literal ``hook_event_name`` for NOTIFICATION,
    STOP and OTHER; it is None for MANUAL and DEFAULT.
    """

    title: str
    message: str
    event_kind: EventKind
    event_name: Optional[str] = None
    session_id: Optional[str] = None
    transcript_path: Optional[str] = None
    stop_hook_active: Optional[bool] = None

    @property
    def event_label(self) -> str:
        """Human-readable event kind, e.g. ``"Stop"`` or ``"PreToolUse"``."""
        if self.event_kind is EventKind.OTHER and self.event_name:
            return self.event_name
        return self.event_kind.value

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "message": self.message,
            "event_kind": self.event_label,
            "session_id": self.session_id,
            "transcript_path": self.transcript_path,
            "stop_hook_active": self.stop_hook_active,
        }


def default_notification() -> ResolvedNotification:
    """Built-in notification used when there is no usable payload."""
    return ResolvedNotification(
        title=DEFAULT_TITLE,
        message=DEFAULT_MESSAGE,
        event_kind=EventKind.DEFAULT,
    )


def _optional(data: dict, key: str, expected: type, ignored: List[str]) -> Any:
    """Fetch an optional field, treating a wrong JSON type as absent."""
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, expected):
        ignored.append(f"{key} ({type(value).__name__})")
        return None
    return value


@dataclass
class HookPayload:
    """Decoded hook payload. Every field is optional."""

    hook_event_name: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    session_id: Optional[str] = None
    transcript_path: Optional[str] = None
    stop_hook_active: Optional[bool] = None
    ignored_fields: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "HookPayload":
        """Decode a parsed JSON value.

        Args:
            data: Result of json.loads().

        Returns:
            HookPayload with wrongly-typed optional fields dropped.

        Raises:
            PayloadError: If data is not an object or the event name is not a string.
        """
        if not isinstance(data, dict):
            raise PayloadError(f"payload must be a JSON object, got {type(data).__name__}")

        event_name = data.get("hook_event_name")
        if event_name is not None and not isinstance(event_name, str):
            raise PayloadError(
                f"hook_event_name must be a string, got {type(event_name).__name__}"
            )

        ignored: List[str] = []
        return cls(
            hook_event_name=event_name,
            title=_optional(data, "title", str, ignored),
            message=_optional(data, "message", str, ignored),
            session_id=_optional(data, "session_id", str, ignored),
            transcript_path=_optional(data, "transcript_path", str, ignored),
            stop_hook_active=_optional(data, "stop_hook_active", bool, ignored),
            ignored_fields=ignored,
        )

    def to_notification(self) -> ResolvedNotification:
        """Apply the per-event-kind title/message rules."""
        event = self.hook_event_name

        if event is None:
            kind = EventKind.MANUAL
            title = self.title or DEFAULT_TITLE
            message = self.message or MANUAL_MESSAGE
        elif event == EVENT_NOTIFICATION:
            kind = EventKind.NOTIFICATION
            title = DEFAULT_TITLE
            message = self.message or DEFAULT_MESSAGE
        elif event == EVENT_STOP:
            kind = EventKind.STOP
            title = DEFAULT_TITLE
            message = STOP_CONTINUING_MESSAGE if self.stop_hook_active else STOP_MESSAGE
        else:
            kind = EventKind.OTHER
            title = DEFAULT_TITLE
            message = self.message or f"Event: {event}"

        return ResolvedNotification(
            title=title,
            message=message,
            event_kind=kind,
            event_name=event,
            session_id=self.session_id,
            transcript_path=self.transcript_path,
            stop_hook_active=self.stop_hook_active,
        )


def parse_payload(raw: str, log: Optional[DiagnosticLog] = None) -> ResolvedNotification:
    """Decode a raw hook payload into a notification.

    Args:
        raw: JSON text from --payload or stdin.
        log: Diagnostic sink.

    Returns:
        The resolved notification; the built-in default if raw is malformed.
    """
    log = log or NullDiagnosticLog()

    # PowerShell and some editors prefix piped text with a BOM
    text = raw.lstrip("\ufeff").strip()

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        log.log(f"Failed to parse payload as JSON: {type(e).__name__}: {e}")
        return default_notification()

    try:
        payload = HookPayload.from_dict(data)
    except PayloadError as e:
        log.log(f"Invalid payload: {e.message}")
        return default_notification()

    if payload.ignored_fields:
        log.log(f"Ignoring fields with unexpected types: {', '.join(payload.ignored_fields)}")

    notification = payload.to_notification()
    log.log(f"Parsed {notification.event_label} event")
    if notification.session_id:
        log.log(f"Session ID: {notification.session_id}")
    if notification.transcript_path:
        log.log(f"Transcript: {notification.transcript_path}")
    if notification.stop_hook_active is not None:
        log.log(f"stop_hook_active: {notification.stop_hook_active}")

    return notification


__all__ = [
    "DEFAULT_TITLE",
    "DEFAULT_MESSAGE",
    "MANUAL_MESSAGE",
    "STOP_MESSAGE",
    "STOP_CONTINUING_MESSAGE",
    "EventKind",
    "HookPayload",
    "ResolvedNotification",
    "default_notification",
    "parse_payload",
]
