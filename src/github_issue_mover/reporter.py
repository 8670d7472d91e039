"""Progress reporting for a move.

The mover only talks to a ``ProgressReporter``; it never writes to the console
itself. Calls strictly alternate: every ``step_started`` is resolved by either
``step_succeeded`` or ``step_failed`` before the next one. Reporters must not
raise.
"""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    def step_started(self, label: str) -> None: ...

    def step_succeeded(self) -> None: ...

    def step_failed(self, message: str) -> None: ...

    def note(self, message: str) -> None: ...


class ConsoleReporter:
    """Render each step as a single status line.

    The label is printed indented while the step runs; on success the line is
    rewritten in place with a check mark.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stdout
        self._open = False

    def _write(self, text: str) -> None:
        try:
            self._stream.write(text)
            self._stream.flush()
        except OSError:
            logger.warning("Failed to write progress output", exc_info=True)

    def step_started(self, label: str) -> None:
        self._write(f"   {label}")
        self._open = True

    def step_succeeded(self) -> None:
        self._write("\r✅ \n")
        self._open = False

    def step_failed(self, message: str) -> None:
        if self._open:
            self._write("\n")
            self._open = False
        self._write(f"❌ {message}\n")

    def note(self, message: str) -> None:
        self._write(f"    {message}\n")


class LoggingReporter:
    """Send progress events to a logger instead of a terminal."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self._label: str | None = None

    def step_started(self, label: str) -> None:
        self._label = label
        self._log.info("Step started", extra={"step": label})

    def step_succeeded(self) -> None:
        self._log.info("Step succeeded", extra={"step": self._label})
        self._label = None

    def step_failed(self, message: str) -> None:
        self._log.error(message, extra={"step": self._label})
        self._label = None

    def note(self, message: str) -> None:
        self._log.info(message)


class NullReporter:
    def step_started(self, label: str) -> None:
        pass

    def step_succeeded(self) -> None:
        pass

    def step_failed(self, message: str) -> None:
        pass

    def note(self, message: str) -> None:
        pass
