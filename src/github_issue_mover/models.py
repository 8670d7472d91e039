"""Typed entities exchanged between the tracker client and the mover.

Raw PyGithub objects are mapped into these immediately by the client, so the
mover never inspects remote payload shapes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from github_issue_mover.errors import MoveError
    from github_issue_mover.mover import MoveStep


@dataclass(frozen=True, slots=True)
class RepositoryReference:
    """A repository named on the command line as ``org/repo``."""

    org: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.repo}"

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True, slots=True)
class IssueReference:
    """An issue within a repository, e.g. ``acme/widgets#42``."""

    org: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.repo}"

    @property
    def repository(self) -> RepositoryReference:
        return RepositoryReference(org=self.org, repo=self.repo)

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"


@dataclass(frozen=True, slots=True)
class TrackerRepository:
    """Repository metadata resolved from the tracker."""

    org: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.org}/{self.repo}"


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    login: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RateLimitInfo:
    limit: int
    remaining: int
    reset_at: datetime


@dataclass(frozen=True, slots=True)
class Comment:
    author: str
    created_at: datetime
    body: str


@dataclass(frozen=True, slots=True)
class SourceIssue:
    """The issue being moved, as fetched from the source repository."""

    number: int
    title: str
    body: str
    author: str
    created_at: datetime
    closed_at: datetime | None = None
    comment_count: int = 0
    html_url: str = ""
    comments: tuple[Comment, ...] = field(default_factory=tuple)

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    """An issue created on the destination repository."""

    org: str
    repo: str
    number: int
    html_url: str = ""

    @property
    def reference(self) -> IssueReference:
        return IssueReference(org=self.org, repo=self.repo, number=self.number)


@dataclass(frozen=True, slots=True)
class IssueUpdate:
    """Patch applied to an existing issue."""

    state: str


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Terminal outcome of one move, built once at the end of the run.

    On failure, ``destination`` is still set when the destination issue had
    already been created, so the operator knows what to clean up.
    """

    message: str
    destination: IssueReference | None = None
    destination_url: str = ""
    comments_copied: int = 0
    failed_step: MoveStep | None = None
    error: MoveError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
