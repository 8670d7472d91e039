from __future__ import annotations

from github_issue_mover.main import main

if __name__ == "__main__":
    raise SystemExit(main())
