"""Desktop notification delivery for claude-notify."""

from claude_notify.notify.backends import (
    BACKEND_NAMES,
    Backend,
    MacOSBackend,
    NotifySendBackend,
    PlyerBackend,
    WindowsBalloonBackend,
    WindowsToastBackend,
)
from claude_notify.notify.dispatcher import (
    NotificationDispatcher,
    backend_chain,
    build_backend,
    default_backends,
)

__all__ = [
    "BACKEND_NAMES",
    "Backend",
    "MacOSBackend",
    "NotifySendBackend",
    "PlyerBackend",
    "WindowsBalloonBackend",
    "WindowsToastBackend",
    "NotificationDispatcher",
    "backend_chain",
    "build_backend",
    "default_backends",
]
