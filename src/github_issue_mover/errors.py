"""Error taxonomy for moving an issue.

Two families live here:

- ``TrackerError`` and subclasses are the conditions reported by the tracker
  client (not found, transport failure, rate limited).
- ``MoveError`` and subclasses are what the mover reports to the operator.
  Every one of them is terminal for the run.
"""

from __future__ import annotations

from enum import Enum


class TrackerError(Exception):
    """A remote tracker operation failed."""


class NotFoundError(TrackerError):
    """The requested repository or issue does not exist (or is not visible)."""


class TransportError(TrackerError):
    """Any other failure talking to the tracker."""


class RateLimitedError(TrackerError):
    """The tracker refused the request because the rate limit is exhausted."""


class MoveError(Exception):
    """Base class for failures reported to the operator."""


class ParseErrorKind(str, Enum):
    MALFORMED_URL = "malformed_url"
    WRONG_HOST = "wrong_host"
    BAD_ISSUE_PATH_SHAPE = "bad_issue_path_shape"
    NOT_AN_ISSUE_URL = "not_an_issue_url"
    BAD_ISSUE_NUMBER = "bad_issue_number"
    BAD_REPO_FORMAT = "bad_repo_format"


class ParseError(MoveError, ValueError):
    """A command-line identifier could not be parsed. No network call was made."""

    def __init__(self, kind: ParseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class TrackerLookupError(MoveError):
    """A repository or issue lookup returned not-found."""


class RepositoryNotFound(TrackerLookupError):
    def __init__(self, which: str, org: str, repo: str) -> None:
        super().__init__(f"Could not find the {which} repository '{org}/{repo}'.")
        self.which = which
        self.org = org
        self.repo = repo


class IssueNotFound(TrackerLookupError):
    def __init__(self, number: int, org: str, repo: str) -> None:
        super().__init__(f"Could not find the issue #{number} in '{org}/{repo}'.")
        self.number = number
        self.org = org
        self.repo = repo


class PreconditionError(MoveError):
    """The source issue is not in a state that can be moved."""


class AlreadyClosed(PreconditionError):
    def __init__(self, number: int) -> None:
        super().__init__(f"Issue #{number} is already closed.")
        self.number = number


class RemoteFailure(MoveError):
    """Any other tracker failure, surfaced with the underlying message."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause


class CommentCopyFailed(MoveError):
    """Copying one of the comments to the destination issue failed.

    ``index`` is 1-based; ``index - 1`` comments were copied before it.
    """

    def __init__(self, index: int, total: int, cause: BaseException) -> None:
        reason = str(cause) or type(cause).__name__
        super().__init__(f"Failed to copy comment #{index}/{total}: {reason}")
        self.index = index
        self.total = total
        self.cause = cause

    @property
    def copied(self) -> int:
        return self.index - 1
