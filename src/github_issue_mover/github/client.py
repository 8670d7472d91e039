"""GitHub implementation of the tracker client.

This wraps PyGithub so that GitHub calls stay out of the mover and the CLI, and
maps every response into the typed entities in ``models`` before returning it.
Library exceptions are translated into ``TrackerError`` conditions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Protocol

import requests
from github import (
    Auth,
    Github,
    GithubException,
    RateLimitExceededException,
    UnknownObjectException,
)
from github.Issue import Issue
from github.Repository import Repository

from github_issue_mover.errors import (
    NotFoundError,
    RateLimitedError,
    TransportError,
)
from github_issue_mover.models import (
    AuthenticatedUser,
    Comment,
    CreatedIssue,
    IssueUpdate,
    RateLimitInfo,
    SourceIssue,
    TrackerRepository,
)

logger = logging.getLogger(__name__)


class TrackerClient(Protocol):
    """The remote operations the mover needs from an issue tracker."""

    def get_current_user(self) -> AuthenticatedUser: ...

    def get_rate_limit(self) -> RateLimitInfo: ...

    def get_repository(self, org: str, repo: str) -> TrackerRepository: ...

    def get_issue(self, repository: TrackerRepository, number: int) -> SourceIssue: ...

    def list_comments(self, repository: TrackerRepository, number: int) -> list[Comment]: ...

    def create_issue(self, repository: TrackerRepository, title: str, body: str) -> CreatedIssue: ...

    def create_comment(self, repository: TrackerRepository, number: int, body: str) -> None: ...

    def update_issue(self, repository: TrackerRepository, number: int, update: IssueUpdate) -> None: ...


def _error_message(e: GithubException) -> str:
    data = e.data
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return f"GitHub API error {e.status}: {message}"
    return f"GitHub API error {e.status}"


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except UnknownObjectException as e:
        raise NotFoundError(_error_message(e)) from e
    except RateLimitExceededException as e:
        raise RateLimitedError(_error_message(e)) from e
    except GithubException as e:
        logger.debug("GitHub request failed", extra={"operation": operation, "status": e.status})
        raise TransportError(_error_message(e)) from e
    except requests.RequestException as e:
        logger.debug("Network error", extra={"operation": operation})
        raise TransportError(f"Network error: {e}") from e


def _as_utc(value: datetime) -> datetime:
    # Older PyGithub releases return naive UTC timestamps.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _login(user: object) -> str:
    login = getattr(user, "login", None)
    if isinstance(login, str) and login.strip():
        return login
    return "ghost"


class GitHubTrackerClient:
    """Tracker client backed by the GitHub REST API."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 15,
        retries: int = 3,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        if github_api is not None:
            self._github = github_api
            logger.debug("Using injected Github instance")
        else:
            self._github = Github(
                auth=Auth.Token(token),
                base_url=base_url.rstrip("/"),
                timeout=timeout,
                retry=retries,
                user_agent="github-issue-mover",
            )

        # Issues fetched or created during this run, so commenting on them needs no extra GET.
        self._issues: dict[tuple[str, int], Issue] = {}

    def _repo(self, repository: TrackerRepository) -> Repository:
        return self._github.get_repo(repository.full_name, lazy=True)

    def _issue(self, repository: TrackerRepository, number: int) -> Issue:
        key = (repository.full_name, number)
        issue = self._issues.get(key)
        if issue is None:
            issue = self._repo(repository).get_issue(number)
            self._issues[key] = issue
        return issue

    def get_current_user(self) -> AuthenticatedUser:
        with _translate_errors("get_current_user"):
            user = self._github.get_user()
            login = user.login
            name = user.name
        logger.info("Authenticated with GitHub", extra={"login": login})
        return AuthenticatedUser(login=login, name=name)

    def get_rate_limit(self) -> RateLimitInfo:
        """Return the rate-limit window reported by the most recent response."""

        with _translate_errors("get_rate_limit"):
            remaining, limit = self._github.rate_limiting
            reset = self._github.rate_limiting_resettime
        return RateLimitInfo(
            limit=limit,
            remaining=remaining,
            reset_at=datetime.fromtimestamp(reset, tz=UTC),
        )

    def get_repository(self, org: str, repo: str) -> TrackerRepository:
        with _translate_errors("get_repository"):
            found = self._github.get_repo(f"{org}/{repo}")
            full_name = found.full_name
        owner, _, name = full_name.partition("/")
        logger.debug("Repository resolved", extra={"repo": full_name})
        return TrackerRepository(org=owner or org, repo=name or repo)

    def get_issue(self, repository: TrackerRepository, number: int) -> SourceIssue:
        with _translate_errors("get_issue"):
            issue = self._issue(repository, number)
            fetched = SourceIssue(
                number=issue.number,
                title=issue.title or "",
                body=issue.body or "",
                author=_login(issue.user),
                created_at=_as_utc(issue.created_at),
                closed_at=_as_utc(issue.closed_at) if issue.closed_at is not None else None,
                comment_count=issue.comments or 0,
                html_url=issue.html_url or "",
            )
        logger.debug(
            "Issue fetched",
            extra={"repo": repository.full_name, "issue_number": number},
        )
        return fetched

    def list_comments(self, repository: TrackerRepository, number: int) -> list[Comment]:
        with _translate_errors("list_comments"):
            issue = self._issue(repository, number)
            comments = [
                Comment(
                    author=_login(c.user),
                    created_at=_as_utc(c.created_at),
                    body=c.body or "",
                )
                for c in issue.get_comments()
            ]
        logger.debug(
            "Comments listed",
            extra={
                "repo": repository.full_name,
                "issue_number": number,
                "count": len(comments),
            },
        )
        return comments

    def create_issue(self, repository: TrackerRepository, title: str, body: str) -> CreatedIssue:
        with _translate_errors("create_issue"):
            issue = self._repo(repository).create_issue(title=title, body=body)
        self._issues[(repository.full_name, issue.number)] = issue

        logger.info(
            "Issue created",
            extra={"repo": repository.full_name, "issue_number": issue.number},
        )
        return CreatedIssue(
            org=repository.org,
            repo=repository.repo,
            number=issue.number,
            html_url=issue.html_url or "",
        )

    def create_comment(self, repository: TrackerRepository, number: int, body: str) -> None:
        with _translate_errors("create_comment"):
            self._issue(repository, number).create_comment(body)
        logger.debug(
            "Comment created",
            extra={"repo": repository.full_name, "issue_number": number},
        )

    def update_issue(self, repository: TrackerRepository, number: int, update: IssueUpdate) -> None:
        with _translate_errors("update_issue"):
            self._issue(repository, number).edit(state=update.state)
        logger.info(
            "Issue updated",
            extra={"repo": repository.full_name, "issue_number": number, "state": update.state},
        )

    def close(self) -> None:
        """Close the underlying HTTP connection."""

        self._github.close()


__all__ = ["GitHubTrackerClient", "TrackerClient"]
