"""
Repository Manager - fetches repositories into local working directories

Responsible for:
- Cloning remote git repositories into temporary checkouts
- Serving existing local directories
- Cleaning up temporary checkouts
"""

import logging
import re
import shutil
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from git import Repo
from git.exc import GitError

from navvi.core.exceptions import FetchError

logger = logging.getLogger(__name__)

REPO_NAME_PATTERN = re.compile(r"([^/]+)\.git$|([^/]+)$")
GITHUB_HTTPS_PREFIX = "https://github.com/"


def extract_repo_name(identifier: str) -> str:
    """
    Last path segment of a repository URL or path, without ``.git``.

    ``https://github.com/owner/name.git`` -> ``name``
    """
    match = REPO_NAME_PATTERN.search(identifier.rstrip("/"))
    if not match:
        return identifier
    return match.group(1) or match.group(2)


def is_remote(identifier: str) -> bool:
    return "://" in identifier or identifier.startswith("git@")


class RepositoryFetcher(ABC):
    """Produces a local directory tree for a repository identifier"""

    @abstractmethod
    def fetch(self, identifier: str) -> Path:
        """
        Materialize the repository locally.

        Raises:
            FetchError: if the repository cannot be obtained
        """

    def release(self, path: Path):
        """Release a directory returned by fetch()"""

    @contextmanager
    def checkout(self, identifier: str) -> Iterator[Path]:
        path = self.fetch(identifier)
        try:
            yield path
        finally:
            self.release(path)


class LocalDirectoryFetcher(RepositoryFetcher):
    """Serves an existing directory; nothing is copied or deleted"""

    def fetch(self, identifier: str) -> Path:
        path = Path(identifier).expanduser()
        if not path.is_dir():
            raise FetchError(identifier, "not a directory")
        return path.resolve()


class GitRepositoryFetcher(RepositoryFetcher):
    """
    Clones remote repositories with GitPython into temporary directories.

    Args:
        clone_depth: Shallow clone depth (None clones full history)
        token: Access token injected into GitHub HTTPS URLs
        temp_root: Parent directory for checkouts (system temp when None)
    """

    def __init__(
        self,
        clone_depth: Optional[int] = None,
        token: Optional[str] = None,
        temp_root: Optional[Union[str, Path]] = None,
    ):
        self.clone_depth = clone_depth
        self.token = token
        self.temp_root = Path(temp_root) if temp_root else None

    def _clone_url(self, url: str) -> str:
        if self.token and url.startswith(GITHUB_HTTPS_PREFIX):
            return url.replace("https://", f"https://{self.token}@", 1)
        return url

    def _redact(self, text: str) -> str:
        return text.replace(self.token, "***") if self.token else text

    def fetch(self, identifier: str) -> Path:
        if self.temp_root:
            self.temp_root.mkdir(parents=True, exist_ok=True)
        target = Path(tempfile.mkdtemp(
            prefix=f"navvi-{extract_repo_name(identifier)}-",
            dir=str(self.temp_root) if self.temp_root else None,
        ))

        kwargs = {}
        if self.clone_depth:
            kwargs["depth"] = self.clone_depth

        logger.info(f"Cloning {identifier} into {target}")
        try:
            repo = Repo.clone_from(self._clone_url(identifier), str(target), **kwargs)
            repo.close()
        except (GitError, OSError, ValueError) as e:
            self.release(target)
            raise FetchError(identifier, self._redact(str(e).strip())) from e
        return target

    def release(self, path: Path):
        if path.exists():
            shutil.rmtree(path, ignore_errors=True)
            logger.debug(f"Removed checkout {path}")


class AutoFetcher(RepositoryFetcher):
    """Dispatches to the local or git fetcher depending on the identifier"""

    def __init__(self, git_fetcher: GitRepositoryFetcher, local_fetcher: Optional[LocalDirectoryFetcher] = None):
        self.git_fetcher = git_fetcher
        self.local_fetcher = local_fetcher or LocalDirectoryFetcher()
        self._owned = set()

    def fetch(self, identifier: str) -> Path:
        if is_remote(identifier):
            path = self.git_fetcher.fetch(identifier)
            self._owned.add(path)
            return path
        return self.local_fetcher.fetch(identifier)

    def release(self, path: Path):
        if path in self._owned:
            self._owned.discard(path)
            self.git_fetcher.release(path)
