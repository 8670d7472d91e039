"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from github_issue_mover.github.client import GitHubTrackerClient
from github_issue_mover.models import (
    AuthenticatedUser,
    Comment,
    CreatedIssue,
    RateLimitInfo,
    SourceIssue,
    TrackerRepository,
)


class RecordingReporter:
    """Reporter that keeps every event for later assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str | None]] = []

    def step_started(self, label: str) -> None:
        self.events.append(("started", label))

    def step_succeeded(self) -> None:
        self.events.append(("succeeded", None))

    def step_failed(self, message: str) -> None:
        self.events.append(("failed", message))

    def note(self, message: str) -> None:
        self.events.append(("note", message))

    @property
    def failures(self) -> list[str]:
        return [m for kind, m in self.events if kind == "failed" and m is not None]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def source_comments() -> list[Comment]:
    return [
        Comment(author="alice", created_at=datetime(2025, 1, 2, 10, 0, tzinfo=UTC), body="c1"),
        Comment(author="bob", created_at=datetime(2025, 1, 3, 11, 30, tzinfo=UTC), body="c2"),
        Comment(author="carol", created_at=datetime(2025, 1, 4, 12, 45, tzinfo=UTC), body="c3"),
    ]


@pytest.fixture
def make_client(source_comments: list[Comment]) -> Callable[..., Mock]:
    """Build a mocked tracker client serving acme/widgets#42 with three comments."""

    def _make(
        *,
        comments: list[Comment] | None = None,
        closed_at: datetime | None = None,
        title: str = "Bug",
        new_number: int = 7,
    ) -> Mock:
        listed = source_comments if comments is None else comments

        client = Mock(spec=GitHubTrackerClient)
        client.get_current_user.return_value = AuthenticatedUser(login="mover", name="Issue Mover")
        client.get_rate_limit.return_value = RateLimitInfo(
            limit=5000,
            remaining=4990,
            reset_at=datetime(2025, 1, 5, 8, 0, tzinfo=UTC),
        )
        client.get_repository.side_effect = lambda org, repo: TrackerRepository(org=org, repo=repo)
        client.get_issue.return_value = SourceIssue(
            number=42,
            title=title,
            body="Something is broken.",
            author="reporter",
            created_at=datetime(2025, 1, 1, 9, 5, tzinfo=UTC),
            closed_at=closed_at,
            comment_count=len(listed),
            html_url="https://github.com/acme/widgets/issues/42",
        )
        client.list_comments.return_value = list(listed)
        client.create_issue.side_effect = lambda repository, t, body: CreatedIssue(
            org=repository.org,
            repo=repository.repo,
            number=new_number,
            html_url=f"https://github.com/{repository.full_name}/issues/{new_number}",
        )
        client.create_comment.return_value = None
        client.update_issue.return_value = None
        return client

    return _make
