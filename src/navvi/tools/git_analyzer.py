"""
Git History Analyzer - per-file change counts from commit history
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Optional, Union

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

logger = logging.getLogger(__name__)


class GitHistoryAnalyzer:
    """
    Counts how many commits touched each file of a repository.

    Args:
        max_commits: Only walk the most recent commits (None walks all)
        rev: Revision to start from
    """

    def __init__(self, max_commits: Optional[int] = None, rev: str = "HEAD"):
        self.max_commits = max_commits
        self.rev = rev

    def history(self, root: Union[str, Path]) -> Dict[str, int]:
        """
        Map repo-relative paths (forward slashes) to commit counts.

        A directory that is not a git repository has no history and yields
        an empty mapping; other git failures propagate.
        """
        try:
            repo = Repo(str(root))
        except (InvalidGitRepositoryError, NoSuchPathError):
            logger.debug(f"No git history at {root}")
            return {}

        try:
            if not repo.head.is_valid():
                return {}

            counts: Counter = Counter()
            for commit in repo.iter_commits(self.rev, max_count=self.max_commits):
                # stats diffs against the parent (or the empty tree for the root commit)
                for path in commit.stats.files:
                    counts[str(path).replace("\\", "/")] += 1
        finally:
            repo.close()

        logger.debug(f"Collected history for {len(counts)} files in {root}")
        return dict(counts)
