"""Text written to the destination and source issues."""

from __future__ import annotations

from datetime import UTC, datetime
from email.utils import format_datetime

from github_issue_mover.models import CreatedIssue, IssueReference


def format_date(value: datetime) -> str:
    """Format a timestamp as an RFC 1123 date in GMT.

    Example: ``Wed, 01 Jan 2025 09:05:00 GMT``. Naive timestamps are taken to be UTC.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return format_datetime(value.astimezone(UTC), usegmt=True)


def attribution_header(author: str, created_at: datetime) -> str:
    return f"_From @{author} on {format_date(created_at)}_"


def issue_body(*, author: str, created_at: datetime, body: str, source: IssueReference) -> str:
    return (
        f"{attribution_header(author, created_at)}\n\n"
        f"{body}\n\n"
        f"_Copied from original issue {source}_"
    )


def comment_body(*, author: str, created_at: datetime, body: str) -> str:
    return f"{attribution_header(author, created_at)}\n\n{body}"


def moved_notice(destination: CreatedIssue) -> str:
    return f"This issue was moved to {destination.reference}"
