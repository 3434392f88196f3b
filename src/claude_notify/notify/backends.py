"""Desktop notification backends.

Each backend shows one notification through one OS facility and reports
success as a bool. Failures (missing executable, missing library, non-zero
exit, timeout, permission errors) are logged and turned into ``False`` so
the dispatcher can move on to the next backend.
"""

from __future__ import annotations

import abc
import importlib.util
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from claude_notify.diagnostics import DiagnosticLog, NullDiagnosticLog

DEFAULT_APP_ID = "Claude Code"
DEFAULT_TIMEOUT_SECONDS = 10
BALLOON_TIMEOUT_MS = 5000

# Title/message reach PowerShell through the environment, never through the script text
TITLE_ENV = "CLAUDE_NOTIFY_TITLE"
MESSAGE_ENV = "CLAUDE_NOTIFY_MESSAGE"
APP_ID_ENV = "CLAUDE_NOTIFY_APP_ID"
BALLOON_MS_ENV = "CLAUDE_NOTIFY_BALLOON_MS"

POWERSHELL_ARGS = ["powershell", "-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command"]

TOAST_SCRIPT = r'''
$ErrorActionPreference = 'Stop'
[Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime] | Out-Null
[Windows.Data.Xml.Dom.XmlDocument, Windows.Data.Xml.Dom.XmlDocument, ContentType = WindowsRuntime] | Out-Null

$title = [System.Security.SecurityElement]::Escape($env:CLAUDE_NOTIFY_TITLE)
$message = [System.Security.SecurityElement]::Escape($env:CLAUDE_NOTIFY_MESSAGE)

$template = @"
<toast>
    <visual>
        <binding template="ToastText02">
            <text id="1">$title</text>
            <text id="2">$message</text>
        </binding>
    </visual>
</toast>
"@

$xml = New-Object Windows.Data.Xml.Dom.XmlDocument
$xml.LoadXml($template)
$toast = [Windows.UI.Notifications.ToastNotification]::new($xml)
[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier($env:CLAUDE_NOTIFY_APP_ID).Show($toast)
'''

BALLOON_SCRIPT = r'''
$ErrorActionPreference = 'Stop'
Add-Type -AssemblyName System.Windows.Forms
Add-Type -AssemblyName System.Drawing

$timeout = [int]$env:CLAUDE_NOTIFY_BALLOON_MS
$icon = New-Object System.Windows.Forms.NotifyIcon
try {
    $icon.Icon = [System.Drawing.SystemIcons]::Information
    $icon.BalloonTipIcon = [System.Windows.Forms.ToolTipIcon]::Info
    $icon.BalloonTipTitle = $env:CLAUDE_NOTIFY_TITLE
    $icon.BalloonTipText = $env:CLAUDE_NOTIFY_MESSAGE
    $icon.Visible = $true
    $icon.ShowBalloonTip($timeout)
    Start-Sleep -Milliseconds $timeout
} finally {
    $icon.Dispose()
}
'''

OSASCRIPT_ARGS = [
    "osascript",
    "-e", "on run argv",
    "-e", "display notification (item 2 of argv) with title (item 1 of argv)",
    "-e", "end run",
]


class Backend(abc.ABC):
    """A single delivery mechanism in the fallback chain."""

    name: str = ""

    def __init__(self, log: Optional[DiagnosticLog] = None):
        self.log = log or NullDiagnosticLog()

    @abc.abstractmethod
    def deliver(self, title: str, message: str) -> bool:
        """Show the notification; may raise on internal failure."""

        raise NotImplementedError

    def is_available(self) -> bool:
        """Cheap check for whether this backend could work here."""
        return True

    def send(self, title: str, message: str) -> bool:
        """Show the notification, converting every failure to ``False``."""
        try:
            return bool(self.deliver(title, message))
        except Exception as e:
            self.log.log(f"{self.name} backend failed: {type(e).__name__}: {e}")
            return False


class SubprocessBackend(Backend):
    """Backend that shells out to an OS helper executable."""

    executable: str = ""

    def __init__(
        self,
        log: Optional[DiagnosticLog] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        super().__init__(log)
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def _run(self, args: List[str], env: Optional[Dict[str, str]] = None) -> bool:
        try:
            subprocess.run(
                args,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env={**os.environ, **env} if env else None,
            )
            return True
        except FileNotFoundError:
            self.log.log(f"{self.name} backend unavailable: {self.executable} not found")
        except subprocess.TimeoutExpired:
            self.log.log(f"{self.name} backend timed out after {self.timeout}s")
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            self.log.log(f"{self.name} backend exited with {e.returncode}: {stderr}")
        except OSError as e:
            self.log.log(f"{self.name} backend could not start: {e}")
        return False


class WindowsToastBackend(SubprocessBackend):
    """Modern Windows toast shown under a fixed application identity."""

    name = "windows-toast"
    executable = "powershell"

    def __init__(
        self,
        log: Optional[DiagnosticLog] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        app_id: str = DEFAULT_APP_ID,
    ):
        super().__init__(log, timeout)
        self.app_id = app_id

    def deliver(self, title: str, message: str) -> bool:
        env = {TITLE_ENV: title, MESSAGE_ENV: message, APP_ID_ENV: self.app_id}
        return self._run(POWERSHELL_ARGS + [TOAST_SCRIPT], env)


class WindowsBalloonBackend(SubprocessBackend):
    """Legacy tray balloon tip, shown for a fixed time then removed."""

    name = "windows-balloon"
    executable = "powershell"

    def __init__(
        self,
        log: Optional[DiagnosticLog] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        balloon_timeout_ms: int = BALLOON_TIMEOUT_MS,
    ):
        # The script sleeps for the balloon's lifetime before disposing the icon
        super().__init__(log, max(timeout, balloon_timeout_ms / 1000 + 5))
        self.balloon_timeout_ms = balloon_timeout_ms

    def deliver(self, title: str, message: str) -> bool:
        env = {
            TITLE_ENV: title,
            MESSAGE_ENV: message,
            BALLOON_MS_ENV: str(self.balloon_timeout_ms),
        }
        return self._run(POWERSHELL_ARGS + [BALLOON_SCRIPT], env)


class NotifySendBackend(SubprocessBackend):
    """Linux desktop notification via libnotify's notify-send."""

    name = "notify-send"
    executable = "notify-send"

    def __init__(
        self,
        log: Optional[DiagnosticLog] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        app_id: str = DEFAULT_APP_ID,
    ):
        super().__init__(log, timeout)
        self.app_id = app_id

    def deliver(self, title: str, message: str) -> bool:
        # "--" so a title starting with "-" is not read as an option
        return self._run(["notify-send", "-a", self.app_id, "--", title, message])


class MacOSBackend(SubprocessBackend):
    """macOS Notification Center via osascript."""

    name = "osascript"
    executable = "osascript"

    def deliver(self, title: str, message: str) -> bool:
        return self._run(OSASCRIPT_ARGS + [title, message])


class PlyerBackend(Backend):
    """Cross-platform fallback through plyer's notification facade."""

    name = "plyer"

    def __init__(
        self,
        log: Optional[DiagnosticLog] = None,
        app_id: str = DEFAULT_APP_ID,
        timeout_seconds: int = BALLOON_TIMEOUT_MS // 1000,
    ):
        super().__init__(log)
        self.app_id = app_id
        self.timeout_seconds = timeout_seconds

    def is_available(self) -> bool:
        return importlib.util.find_spec("plyer") is not None

    def deliver(self, title: str, message: str) -> bool:
        try:
            from plyer import notification
        except ImportError:
            self.log.log("plyer backend unavailable: plyer is not installed")
            return False

        # Raises NotImplementedError when plyer has no implementation for this platform
        notification.notify(
            title=title,
            message=message,
            app_name=self.app_id,
            timeout=self.timeout_seconds,
        )
        return True


BACKEND_CLASSES = {
    cls.name: cls
    for cls in (
        WindowsToastBackend,
        WindowsBalloonBackend,
        NotifySendBackend,
        MacOSBackend,
        PlyerBackend,
    )
}
BACKEND_NAMES = tuple(BACKEND_CLASSES)

__all__ = [
    "Backend",
    "SubprocessBackend",
    "WindowsToastBackend",
    "WindowsBalloonBackend",
    "NotifySendBackend",
    "MacOSBackend",
    "PlyerBackend",
    "BACKEND_CLASSES",
    "BACKEND_NAMES",
    "BALLOON_TIMEOUT_MS",
    "DEFAULT_APP_ID",
]
