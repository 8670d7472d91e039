"""JSON log lines for a move.

Every line has ``timestamp``, ``level``, ``logger`` and ``message``. The fields
that describe a move (``MOVE_FIELDS``) are lifted to top-level keys, so a run
can be followed by ``step`` or ``source`` without digging; any other
``extra=`` values go under ``"extra"``. Output goes to stderr, apart from the
progress lines the reporter prints on stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

MOVE_FIELDS: tuple[str, ...] = (
    "step",
    "source",
    "destination",
    "repo",
    "issue_number",
    "comments",
)

# Attributes present on every record; anything else was passed through ``extra=``.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def _custom_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line, move fields first-class."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        fields = _custom_fields(record)
        for name in MOVE_FIELDS:
            if name in fields:
                payload[name] = fields.pop(name)
        if fields:
            payload["extra"] = fields

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: TextIO | None = None) -> None:
    """Send JSON lines for ``level`` and above to ``stream`` (stderr by default)."""

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())

    # PyGithub logs every request at DEBUG.
    logging.getLogger("github").setLevel(max(root.level, logging.INFO))
