"""Parse the issue URL and destination repository given on the command line.

Both parsers are pure: they validate shape only and never touch the network.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from github_issue_mover.errors import ParseError, ParseErrorKind
from github_issue_mover.models import IssueReference, RepositoryReference

DEFAULT_WEB_HOST = "github.com"


def parse_issue_ref(url: str, *, web_host: str = DEFAULT_WEB_HOST) -> IssueReference:
    """Parse ``https://<web_host>/<org>/<repo>/issues/<number>``.

    Raises:
        ParseError: with the kind describing the first check that failed.
    """

    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError as e:
        raise ParseError(
            ParseErrorKind.MALFORMED_URL, f"Failed to parse from url '{url}': {e}"
        ) from e

    if not parts.scheme or not host:
        raise ParseError(
            ParseErrorKind.MALFORMED_URL,
            f"Failed to parse from url '{url}': not an absolute url",
        )

    if host.lower() != web_host.lower():
        raise ParseError(ParseErrorKind.WRONG_HOST, f"Only {web_host} issues can be moved.")

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) != 4:
        raise ParseError(
            ParseErrorKind.BAD_ISSUE_PATH_SHAPE,
            f"Unknown issue url format: {url}. "
            f"Expected format: https://{web_host}/<org>/<repo>/issues/<number>",
        )

    org, repo, kind, number = segments
    if kind != "issues":
        raise ParseError(ParseErrorKind.NOT_AN_ISSUE_URL, f"Not a url to an issue: {url}")

    # str.isdigit() also accepts non-ASCII digits such as superscripts.
    if not (number.isascii() and number.isdigit()):
        raise ParseError(
            ParseErrorKind.BAD_ISSUE_NUMBER, f"Invalid issue number '{number}' in url: {url}"
        )

    return IssueReference(org=org, repo=repo, number=int(number))


def parse_repo_ref(value: str) -> RepositoryReference:
    """Parse ``<org>/<repo>``."""

    tokens = value.split("/")
    if len(tokens) != 2 or not all(tokens):
        raise ParseError(
            ParseErrorKind.BAD_REPO_FORMAT,
            f"Invalid format for the destination repository: {value}. "
            "Expected format: <org>/<repo>",
        )
    org, repo = tokens
    return RepositoryReference(org=org, repo=repo)
