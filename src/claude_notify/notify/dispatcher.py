"""Fallback chain over notification backends."""

from __future__ import annotations

import platform
from typing import TYPE_CHECKING, List, Optional, Sequence

from claude_notify.diagnostics import DiagnosticLog, NullDiagnosticLog
from claude_notify.display.colors import Colors
from claude_notify.notify.backends import (
    Backend,
    MacOSBackend,
    NotifySendBackend,
    PlyerBackend,
    WindowsBalloonBackend,
    WindowsToastBackend,
)

if TYPE_CHECKING:
    from claude_notify.config.settings import NotifyConfig

PLATFORM_CHAINS = {
    "Windows": ["windows-toast", "windows-balloon", "plyer"],
    "Darwin": ["osascript", "plyer"],
    "Linux": ["notify-send", "plyer"],
}
FALLBACK_CHAIN = ["notify-send", "plyer"]


class NotificationDispatcher:
    """Tries each backend in order until one succeeds.

    No backend is retried and nothing runs in parallel: the first backend
    reporting success ends the chain.
    """

    def __init__(
        self,
        backends: Sequence[Backend],
        log: Optional[DiagnosticLog] = None,
        quiet: bool = False,
    ):
        self.backends = list(backends)
        self.log = log or NullDiagnosticLog()
        self.quiet = quiet

    def _print(self, text: str) -> None:
        if not self.quiet:
            print(text)

    def dispatch(self, title: str, message: str) -> bool:
        """Deliver one notification.

        Args:
            title: Notification title.
            message: Notification body.

        Returns:
            True if any backend showed the notification.
        """
        for index, backend in enumerate(self.backends):
            if index > 0:
                self._print(f"{Colors.YELLOW}Falling back to {backend.name}...{Colors.RESET}")
                self.log.log(f"Falling back to {backend.name}")

            self.log.log(f"Trying {backend.name} backend")
            try:
                ok = backend.send(title, message)
            except Exception as e:
                # send() must not raise; count a broken backend as a failure
                self.log.log(f"{backend.name} backend raised {type(e).__name__}: {e}")
                ok = False

            if ok:
                self._print(f"{Colors.GREEN}Notification sent via {backend.name}{Colors.RESET}")
                self.log.log(f"Notification sent via {backend.name}")
                return True

            self._print(f"{Colors.RED}{backend.name} notification failed{Colors.RESET}")
            self.log.log(f"{backend.name} backend failed")

        self.log.log("All notification backends failed")
        return False


def backend_chain(config: "NotifyConfig", system: Optional[str] = None) -> List[str]:
    """Backend names to try, from config or the platform default."""
    if config.backends:
        return list(config.backends)
    if system is None:
        system = platform.system()
    return list(PLATFORM_CHAINS.get(system, FALLBACK_CHAIN))


def build_backend(name: str, config: "NotifyConfig", log: Optional[DiagnosticLog] = None) -> Backend:
    """Instantiate one backend by name with the configured settings.

    Raises:
        ValueError: If name is not a known backend.
    """
    timeout = config.backend_timeout_seconds
    if name == WindowsToastBackend.name:
        return WindowsToastBackend(log, timeout=timeout, app_id=config.app_id)
    if name == WindowsBalloonBackend.name:
        return WindowsBalloonBackend(log, timeout=timeout, balloon_timeout_ms=config.balloon_timeout_ms)
    if name == NotifySendBackend.name:
        return NotifySendBackend(log, timeout=timeout, app_id=config.app_id)
    if name == MacOSBackend.name:
        return MacOSBackend(log, timeout=timeout)
    if name == PlyerBackend.name:
        return PlyerBackend(log, app_id=config.app_id, timeout_seconds=max(1, config.balloon_timeout_ms // 1000))
    raise ValueError(f"Unknown backend: {name}")


def default_backends(
    config: "NotifyConfig",
    system: Optional[str] = None,
    log: Optional[DiagnosticLog] = None,
) -> List[Backend]:
    """Build the ordered backend list for this platform (or the configured order)."""
    return [build_backend(name, config, log) for name in backend_chain(config, system)]


__all__ = [
    "NotificationDispatcher",
    "PLATFORM_CHAINS",
    "backend_chain",
    "build_backend",
    "default_backends",
]
