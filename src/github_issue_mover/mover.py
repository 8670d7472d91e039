"""Move one issue, with its comments, to another repository.

The move is a fixed linear sequence of steps (``MoveStep``). Each step is a
method that either returns its typed result or raises; ``IssueMover.move``
runs them in order and turns the first failure into a ``MoveResult``.

Nothing is rolled back. A failure after the destination issue exists leaves it
in place (possibly with only some comments copied) and the source issue open,
and the failure message says what was already created so the operator can
clean up.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from enum import Enum
from typing import TypeVar

from github_issue_mover import attribution
from github_issue_mover.errors import (
    AlreadyClosed,
    CommentCopyFailed,
    IssueNotFound,
    MoveError,
    NotFoundError,
    RemoteFailure,
    RepositoryNotFound,
    TrackerError,
)
from github_issue_mover.github.client import TrackerClient
from github_issue_mover.models import (
    Comment,
    CreatedIssue,
    IssueReference,
    IssueUpdate,
    MoveResult,
    RepositoryReference,
    SourceIssue,
    TrackerRepository,
)
from github_issue_mover.reporter import NullReporter, ProgressReporter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MoveStep(str, Enum):
    AUTHENTICATE = "authenticate"
    RESOLVE_REPOSITORIES = "resolve_repositories"
    FETCH_SOURCE_ISSUE = "fetch_source_issue"
    FETCH_COMMENTS = "fetch_comments"
    PRECHECK_STATE = "precheck_state"
    CREATE_DESTINATION_ISSUE = "create_destination_issue"
    COPY_COMMENTS = "copy_comments"
    ANNOTATE_SOURCE = "annotate_source"
    CLOSE_SOURCE = "close_source"
    DONE = "done"

    @property
    def description(self) -> str:
        return self.value.replace("_", " ")


class IssueMover:
    """Drive a tracker client through a single issue move."""

    def __init__(self, *, client: TrackerClient, reporter: ProgressReporter | None = None) -> None:
        self._client = client
        self._reporter = reporter or NullReporter()

    def move(self, source: IssueReference, destination: RepositoryReference) -> MoveResult:
        """Run every step in order and return the outcome.

        Tracker and move failures never escape this method; they are reported
        once through the reporter and returned as a failed ``MoveResult``.
        """

        logger.info("Moving issue", extra={"source": str(source), "destination": str(destination)})

        step = MoveStep.AUTHENTICATE
        issue: SourceIssue | None = None
        created: CreatedIssue | None = None
        copied = 0
        try:
            self.authenticate()

            step = MoveStep.RESOLVE_REPOSITORIES
            source_repo, dest_repo = self.resolve_repositories(source, destination)

            step = MoveStep.FETCH_SOURCE_ISSUE
            issue = self.fetch_source_issue(source_repo, source.number)

            step = MoveStep.FETCH_COMMENTS
            issue = self.fetch_comments(source_repo, issue)

            step = MoveStep.PRECHECK_STATE
            self.precheck_state(issue)

            step = MoveStep.CREATE_DESTINATION_ISSUE
            created = self.create_destination_issue(dest_repo, source, issue)

            step = MoveStep.COPY_COMMENTS
            copied = self.copy_comments(dest_repo, created, issue.comments)

            step = MoveStep.ANNOTATE_SOURCE
            self.annotate_source(source_repo, issue, created)

            step = MoveStep.CLOSE_SOURCE
            self.close_source(source_repo, issue)
        except CommentCopyFailed as e:
            return self._failed(step, e, issue=issue, created=created, copied=e.copied)
        except MoveError as e:
            return self._failed(step, e, issue=issue, created=created, copied=copied)
        except TrackerError as e:
            return self._failed(step, RemoteFailure(e), issue=issue, created=created, copied=copied)

        step = MoveStep.DONE
        logger.info(
            "Issue moved",
            extra={
                "step": step.value,
                "source": str(source),
                "destination": str(created.reference),
                "comments": copied,
            },
        )
        return MoveResult(
            message=f"Completed successfully! New issue: {created.html_url or created.reference}",
            destination=created.reference,
            destination_url=created.html_url,
            comments_copied=copied,
        )

    def _call(self, label: str, operation: Callable[..., T], *args: object) -> T:
        self._reporter.step_started(label)
        result = operation(*args)
        self._reporter.step_succeeded()
        return result

    def authenticate(self) -> None:
        user = self._call("Authenticating...", self._client.get_current_user)
        display = f"{user.name} ({user.login})" if user.name else user.login
        self._reporter.note(f"Authenticated as: {display}")

        # Note-only, not a step: served from the headers of the response above.
        try:
            limits = self._client.get_rate_limit()
        except TrackerError as e:
            logger.warning("Could not read rate limit information", exc_info=True)
            self._reporter.note(f"Rate limit: unavailable ({e})")
            return
        self._reporter.note(f"Rate limit: {limits.limit}")
        self._reporter.note(f"Remaining: {limits.remaining}")
        self._reporter.note(f"Reset date: {attribution.format_date(limits.reset_at)}")

    def _resolve(self, which: str, ref: RepositoryReference) -> TrackerRepository:
        try:
            return self._call(
                f"Fetching {which} repository {ref.full_name}...",
                self._client.get_repository,
                ref.org,
                ref.repo,
            )
        except NotFoundError as e:
            raise RepositoryNotFound(which, ref.org, ref.repo) from e

    def resolve_repositories(
        self, source: IssueReference, destination: RepositoryReference
    ) -> tuple[TrackerRepository, TrackerRepository]:
        source_repo = self._resolve("source", source.repository)
        dest_repo = self._resolve("destination", destination)
        return source_repo, dest_repo

    def fetch_source_issue(self, repository: TrackerRepository, number: int) -> SourceIssue:
        try:
            return self._call(
                f"Fetching issue #{number} from {repository.full_name}...",
                self._client.get_issue,
                repository,
                number,
            )
        except NotFoundError as e:
            raise IssueNotFound(number, repository.org, repository.repo) from e

    def fetch_comments(self, repository: TrackerRepository, issue: SourceIssue) -> SourceIssue:
        """Return ``issue`` with its comments attached, in listing order."""

        comments = self._call(
            f"Retrieving {issue.comment_count} comments...",
            self._client.list_comments,
            repository,
            issue.number,
        )
        return dataclasses.replace(issue, comments=tuple(comments))

    def precheck_state(self, issue: SourceIssue) -> None:
        if issue.is_closed:
            raise AlreadyClosed(issue.number)

    def create_destination_issue(
        self, repository: TrackerRepository, source: IssueReference, issue: SourceIssue
    ) -> CreatedIssue:
        body = attribution.issue_body(
            author=issue.author,
            created_at=issue.created_at,
            body=issue.body,
            source=source,
        )
        return self._call(
            f"Creating new issue in {repository.full_name}...",
            self._client.create_issue,
            repository,
            issue.title,
            body,
        )

    def copy_comments(
        self,
        repository: TrackerRepository,
        destination: CreatedIssue,
        comments: tuple[Comment, ...],
    ) -> int:
        """Copy comments one at a time, in order. Returns the number copied."""

        total = len(comments)
        if not total:
            return 0

        self._reporter.note(f"Copying {total} comment(s)...")
        for index, comment in enumerate(comments, start=1):
            body = attribution.comment_body(
                author=comment.author, created_at=comment.created_at, body=comment.body
            )
            try:
                self._call(
                    f"  Copying comment #{index}/{total}...",
                    self._client.create_comment,
                    repository,
                    destination.number,
                    body,
                )
            except TrackerError as e:
                raise CommentCopyFailed(index, total, e) from e
        self._reporter.note(f"Copied {total} comment(s) successfully")
        return total

    def annotate_source(
        self, repository: TrackerRepository, issue: SourceIssue, destination: CreatedIssue
    ) -> None:
        self._call(
            "Adding a comment in the original issue pointing to the new issue...",
            self._client.create_comment,
            repository,
            issue.number,
            attribution.moved_notice(destination),
        )

    def close_source(self, repository: TrackerRepository, issue: SourceIssue) -> None:
        self._call(
            "Closing the original issue...",
            self._client.update_issue,
            repository,
            issue.number,
            IssueUpdate(state="closed"),
        )

    def _failed(
        self,
        step: MoveStep,
        error: MoveError,
        *,
        issue: SourceIssue | None,
        created: CreatedIssue | None,
        copied: int,
    ) -> MoveResult:
        message = _failure_message(step, error, issue=issue, created=created, copied=copied)
        self._reporter.step_failed(message)
        logger.error(
            "Move failed",
            extra={"step": step.value, "error_type": type(error).__name__},
        )
        return MoveResult(
            message=message,
            destination=created.reference if created else None,
            destination_url=created.html_url if created else "",
            comments_copied=copied,
            failed_step=step,
            error=error,
        )


def _failure_message(
    step: MoveStep,
    error: MoveError,
    *,
    issue: SourceIssue | None,
    created: CreatedIssue | None,
    copied: int,
) -> str:
    message = str(error)
    source = "the source issue"
    if issue is not None and issue.html_url:
        source = f"{source} {issue.html_url}"
    if step is MoveStep.CREATE_DESTINATION_ISSUE:
        return (
            f"{message} (step: {step.description}). Nothing was created; "
            f"{source} is untouched and the move can be retried."
        )
    if created is None:
        return message

    where = created.html_url or str(created.reference)
    if step is MoveStep.CLOSE_SOURCE:
        state = f"{source} was annotated but is still open"
    else:
        state = f"{source} is still open and was not annotated"
    return (
        f"{message} (step: {step.description}). "
        f"Destination issue {where} was created with {copied} comment(s) copied; "
        f"{state}. Clean up manually before retrying."
    )
