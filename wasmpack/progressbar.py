"""User-facing status messages written to standard error."""

from __future__ import annotations

import sys
from typing import TextIO

WARN_EMOJI = "⚠️  "
ERROR_EMOJI = "⛔  "

_BOLD = "\x1b[1m"
_DIM = "\x1b[2m"
_RESET = "\x1b[0m"


class ProgressOutput:
    """Prints informational, warning and error messages."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _style(self, label: str) -> str:
        isatty = getattr(self.stream, "isatty", None)
        if isatty is not None and isatty():
            return f"{_BOLD}{_DIM}{label}{_RESET}"
        return label

    def _message(self, message: str) -> None:
        print(message, file=self.stream)

    def info(self, message: str) -> None:
        """Add an informational message."""
        self._message(f"{self._style('[INFO]')}: {message}")

    def warn(self, message: str) -> None:
        """Add a warning message."""
        self._message(f"{WARN_EMOJI} {self._style('[WARN]')}: {message}")

    def error(self, message: str) -> None:
        """Add an error message."""
        self._message(f"{ERROR_EMOJI} {self._style('[ERR]')}: {message}")


PBAR = ProgressOutput()