"""Append-only diagnostic log.

Every stage of the pipeline reports what it did through a ``DiagnosticLog``.
Writing is best effort: a log that cannot be created or appended to never
changes whether the notification is delivered.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class DiagnosticLog:
    """Sink for diagnostic lines. The base class discards everything."""

    def log(self, message: str) -> None:
        pass


class NullDiagnosticLog(DiagnosticLog):
    """Used when no log path is configured."""


class FileDiagnosticLog(DiagnosticLog):
    """Appends ``"<timestamp> - <message>"`` lines to a file.

    The file is opened, appended to and closed on every call, so concurrent
    invocations sharing one log only ever interleave whole lines.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self._warned = False

    def _timestamp(self) -> str:
        return datetime.now().strftime(TIMESTAMP_FORMAT)

    def log(self, message: str) -> None:
        line = f"{self._timestamp()} - {message}\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            # Warn once per process, then stay quiet
            if not self._warned:
                self._warned = True
                print(
                    f"Warning: cannot write diagnostic log {self.path}: {e}",
                    file=sys.stderr,
                )


def make_diagnostic_log(path: Optional[Union[str, Path]]) -> DiagnosticLog:
    """Return a file-backed log for ``path``, or a no-op log when unset.

    Args:
        path: Log file location. Empty string and None both mean "no log".

    Returns:
        A DiagnosticLog instance.
    """
    if path:
        return FileDiagnosticLog(path)
    return NullDiagnosticLog()


__all__ = [
    "DiagnosticLog",
    "NullDiagnosticLog",
    "FileDiagnosticLog",
    "make_diagnostic_log",
    "TIMESTAMP_FORMAT",
]
