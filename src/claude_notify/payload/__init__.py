"""Hook payload parsing and input resolution."""

from claude_notify.payload.parser import (
    DEFAULT_MESSAGE,
    DEFAULT_TITLE,
    EventKind,
    HookPayload,
    ResolvedNotification,
    default_notification,
    parse_payload,
)
from claude_notify.payload.resolver import (
    InputSource,
    RawInput,
    apply_overrides,
    probe_stdin,
    read_raw_input,
    resolve_notification,
)

__all__ = [
    "DEFAULT_MESSAGE",
    "DEFAULT_TITLE",
    "EventKind",
    "HookPayload",
    "ResolvedNotification",
    "default_notification",
    "parse_payload",
    "InputSource",
    "RawInput",
    "apply_overrides",
    "probe_stdin",
    "read_raw_input",
    "resolve_notification",
]
