"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest

from github_issue_mover.logging import JsonFormatter, configure_logging
from github_issue_mover.mover import MoveStep


@pytest.fixture(autouse=True)
def _restore_root() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str, **fields: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="github_issue_mover.mover",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.__dict__.update(fields)
    return record


def test_move_fields_are_top_level_keys() -> None:
    record = _record(
        "Issue moved",
        step=MoveStep.DONE,
        source="acme/widgets#42",
        destination="acme/widgets2#7",
        comments=3,
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "ERROR"
    assert payload["logger"] == "github_issue_mover.mover"
    assert payload["message"] == "Issue moved"
    assert payload["step"] == "done"
    assert payload["source"] == "acme/widgets#42"
    assert payload["destination"] == "acme/widgets2#7"
    assert payload["comments"] == 3
    assert "extra" not in payload


def test_other_fields_are_grouped_under_extra() -> None:
    record = _record("Move failed", step=MoveStep.COPY_COMMENTS, error_type="CommentCopyFailed")

    payload = json.loads(JsonFormatter().format(record))

    assert payload["step"] == "copy_comments"
    assert payload["extra"] == {"error_type": "CommentCopyFailed"}


def test_record_without_fields_has_only_the_base_keys() -> None:
    payload = json.loads(JsonFormatter().format(_record("Moving issue")))

    assert set(payload) == {"timestamp", "level", "logger", "message"}


def test_configure_logging_writes_json_lines() -> None:
    stream = io.StringIO()
    configure_logging("info", stream=stream)

    logging.getLogger("github_issue_mover.test").info(
        "Issue updated", extra={"repo": "acme/widgets", "issue_number": 42, "state": "closed"}
    )

    line = json.loads(stream.getvalue().strip())
    assert line["message"] == "Issue updated"
    assert line["repo"] == "acme/widgets"
    assert line["issue_number"] == 42
    assert line["extra"] == {"state": "closed"}


def test_configure_logging_replaces_existing_handlers() -> None:
    first, second = io.StringIO(), io.StringIO()
    configure_logging("INFO", stream=first)
    configure_logging("INFO", stream=second)

    logging.getLogger("github_issue_mover.test").warning("once")

    assert first.getvalue() == ""
    assert len(second.getvalue().splitlines()) == 1


def test_configure_logging_keeps_pygithub_quiet() -> None:
    configure_logging("DEBUG", stream=io.StringIO())

    assert logging.getLogger("github").level == logging.INFO
