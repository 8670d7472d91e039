"""GitHub tracker client package."""

from github_issue_mover.github.client import GitHubTrackerClient, TrackerClient

__all__ = [
    "GitHubTrackerClient",
    "TrackerClient",
]
