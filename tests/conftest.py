"""
Pytest fixtures for claude-notify tests.

Test imports use the src/claude_notify/ package via --import-mode=importlib (see pyproject.toml).
"""

import io
import json
from pathlib import Path

import pytest

from claude_notify.config.settings import NotifyConfig
from claude_notify.diagnostics import DiagnosticLog
from claude_notify.notify.backends import Backend


# ═══════════════════════════════════════════════════════════════════════════════
# Path Constants
# ═══════════════════════════════════════════════════════════════════════════════

PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"

# Load fixtures data
FIXTURES_DIR = Path(__file__).parent / "fixtures"
with open(FIXTURES_DIR / "payloads.json") as f:
    PAYLOADS = json.load(f)


# ═══════════════════════════════════════════════════════════════════════════════
# Test Doubles
# ═══════════════════════════════════════════════════════════════════════════════


class RecordingLog(DiagnosticLog):
    """Diagnostic log that keeps lines in memory."""

    def __init__(self):
        self.lines = []

    def log(self, message):
        self.lines.append(message)

    def contains(self, fragment):
        return any(fragment in line for line in self.lines)


class FakeBackend(Backend):
    """Backend with a scripted outcome that records its calls."""

    def __init__(self, name, result=True, raises=None):
        super().__init__()
        self.name = name
        self.result = result
        self.raises = raises
        self.calls = []

    def deliver(self, title, message):
        self.calls.append((title, message))
        if self.raises is not None:
            raise self.raises
        return self.result


class TTYStream(io.StringIO):
    """An interactive terminal: attached, but must never be read."""

    def isatty(self):
        return True

    def read(self, *args):
        raise AssertionError("a TTY must not be read")


# ═══════════════════════════════════════════════════════════════════════════════
# Payload Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def payloads():
    """All sample hook payloads keyed by name."""
    return {name: dict(payload) for name, payload in PAYLOADS.items()}


@pytest.fixture
def payload_text(payloads):
    """Return a sample payload serialized as JSON text."""

    def _payload_text(name):
        return json.dumps(payloads[name])

    return _payload_text


# ═══════════════════════════════════════════════════════════════════════════════
# Pipeline Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def recording_log():
    """In-memory diagnostic log."""
    return RecordingLog()


@pytest.fixture
def make_backend():
    """Factory for scripted fake backends."""
    return FakeBackend


@pytest.fixture
def config():
    """Default per-invocation config with no payload or overrides."""
    return NotifyConfig()


@pytest.fixture
def empty_stdin():
    """Piped stdin that is already at EOF."""
    return io.StringIO("")


@pytest.fixture
def tty_stdin():
    """Interactive terminal on stdin."""
    return TTYStream()


@pytest.fixture
def no_config_file(tmp_path, monkeypatch):
    """Point the config file at a location that does not exist."""
    monkeypatch.setenv("CLAUDE_NOTIFY_CONFIG", str(tmp_path / "missing.json"))
    return tmp_path / "missing.json"
