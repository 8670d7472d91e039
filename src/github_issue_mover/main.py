"""CLI entrypoint: ``github-issue-mover --from=<issue url> --to=<org>/<repo> --token=<token>``."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from github_issue_mover import __version__
from github_issue_mover.config import MoverSettings
from github_issue_mover.errors import ParseError
from github_issue_mover.github.client import GitHubTrackerClient
from github_issue_mover.logging import configure_logging
from github_issue_mover.mover import IssueMover
from github_issue_mover.references import parse_issue_ref, parse_repo_ref
from github_issue_mover.reporter import ConsoleReporter

logger = logging.getLogger(__name__)

PROG = "github-issue-mover"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage=f"{PROG} [OPTIONS]",
        description="Move a GitHub issue, with its comments, to another repository.",
        add_help=False,
        allow_abbrev=False,
        exit_on_error=False,
    )
    parser.add_argument("-h", "--help", "-?", dest="show_help", action="store_true", help="Show help")
    parser.add_argument(
        "--from",
        dest="source",
        default="",
        help="The issue to move. Pass the complete url to the issue.",
    )
    parser.add_argument(
        "--to",
        dest="destination",
        default="",
        help="The repository to move to. Format: org/repo (example: mono/mono)",
    )
    parser.add_argument(
        "--token",
        default="",
        help="The personal access token to use to authorize with GitHub",
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    reporter = ConsoleReporter()

    try:
        args, unexpected = parser.parse_known_args(argv)
    except argparse.ArgumentError as e:
        reporter.step_failed(str(e))
        return 1

    if unexpected:
        print(f"Unexpected argument: {unexpected[0]}")
        return 1

    if args.show_help or not (args.source and args.destination and args.token):
        parser.print_help()
        return 0

    try:
        settings = MoverSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it to one actionable line.
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        reporter.step_failed(f"Configuration error: {problems}")
        return 1

    configure_logging(settings.log_level)

    try:
        source = parse_issue_ref(args.source, web_host=settings.github_web_host)
        destination = parse_repo_ref(args.destination)
    except ParseError as e:
        logger.info("Invalid arguments", extra={"kind": e.kind.value})
        reporter.step_failed(str(e))
        return 1

    client = GitHubTrackerClient(
        token=args.token,
        base_url=settings.github_base_url,
        timeout=settings.timeout,
        retries=settings.retries,
    )
    try:
        result = IssueMover(client=client, reporter=reporter).move(source, destination)
    finally:
        client.close()

    if result.ok:
        reporter.step_started(result.message)
        reporter.step_succeeded()
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
