"""GitHub Issue Mover.

Moves a single GitHub issue, with its comments, to another repository:
- the new issue and each copied comment carry an attribution header
- the original issue gets a "moved to" comment and is closed
"""

__version__ = "0.1.0"

from github_issue_mover.models import IssueReference, MoveResult, RepositoryReference
from github_issue_mover.mover import IssueMover, MoveStep

__all__ = [
    "__version__",
    "IssueMover",
    "IssueReference",
    "MoveResult",
    "MoveStep",
    "RepositoryReference",
]
