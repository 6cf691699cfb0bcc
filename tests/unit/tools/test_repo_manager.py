import shutil

import pytest
from git import Actor, Repo
from git.exc import GitCommandNotFound

from navvi.core.exceptions import FetchError
from navvi.tools.repo_manager import (
    AutoFetcher,
    GitRepositoryFetcher,
    LocalDirectoryFetcher,
    extract_repo_name,
    is_remote,
)

needs_git = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")


@pytest.mark.parametrize(
    "identifier, name",
    [
        ("https://github.com/owner/project.git", "project"),
        ("https://github.com/owner/project", "project"),
        ("https://github.com/owner/project/", "project"),
        ("git@github.com:owner/tool.git", "tool"),
        ("/home/me/code/app", "app"),
    ],
)
def test_extract_repo_name(identifier, name):
    assert extract_repo_name(identifier) == name


def test_is_remote():
    assert is_remote("https://github.com/a/b")
    assert is_remote("git@github.com:a/b.git")
    assert not is_remote("/tmp/project")
    assert not is_remote("relative/dir")


class TestLocalDirectoryFetcher:

    def test_fetch_existing_directory(self, temp_workspace):
        fetcher = LocalDirectoryFetcher()
        with fetcher.checkout(str(temp_workspace)) as path:
            assert path == temp_workspace.resolve()
        assert temp_workspace.exists()

    def test_missing_directory(self, temp_workspace):
        with pytest.raises(FetchError) as exc:
            LocalDirectoryFetcher().fetch(str(temp_workspace / "missing"))
        assert "not a directory" in exc.value.message


class TestGitRepositoryFetcher:

    def test_token_injection(self):
        fetcher = GitRepositoryFetcher(token="s3cret")
        assert fetcher._clone_url("https://github.com/o/r.git") == "https://s3cret@github.com/o/r.git"
        assert fetcher._clone_url("https://gitlab.com/o/r.git") == "https://gitlab.com/o/r.git"
        assert GitRepositoryFetcher()._clone_url("https://github.com/o/r.git") == "https://github.com/o/r.git"

    def test_error_message_redacts_token(self):
        fetcher = GitRepositoryFetcher(token="s3cret")
        assert fetcher._redact("fatal: https://s3cret@github.com") == "fatal: https://***@github.com"

    @needs_git
    def test_clone_and_release(self, temp_workspace):
        origin = temp_workspace / "origin"
        repo = Repo.init(origin)
        (origin / "index.js").write_text("export const a = 1;", encoding="utf-8")
        repo.index.add(["index.js"])
        author = Actor("Navvi Tests", "tests@example.com")
        repo.index.commit("initial", author=author, committer=author)
        repo.close()

        fetcher = GitRepositoryFetcher(temp_root=temp_workspace / "checkouts")
        with fetcher.checkout(origin.as_uri()) as path:
            assert (path / "index.js").read_text(encoding="utf-8") == "export const a = 1;"
            checkout = path
        assert not checkout.exists()

    @needs_git
    def test_clone_failure_raises_fetch_error(self, temp_workspace):
        fetcher = GitRepositoryFetcher(temp_root=temp_workspace)
        with pytest.raises(FetchError):
            fetcher.fetch((temp_workspace / "does-not-exist").as_uri())
        assert list(temp_workspace.iterdir()) == []

    @pytest.mark.parametrize(
        "error",
        [GitCommandNotFound("git", OSError("No such file or directory")), OSError("disk full")],
    )
    def test_unexpected_clone_error_removes_checkout(self, temp_workspace, monkeypatch, error):
        def failing_clone(*args, **kwargs):
            raise error

        monkeypatch.setattr(Repo, "clone_from", failing_clone)
        fetcher = GitRepositoryFetcher(temp_root=temp_workspace)

        with pytest.raises(FetchError) as exc:
            fetcher.fetch("https://github.com/acme/widgets.git")
        assert exc.value.__cause__ is error
        assert list(temp_workspace.iterdir()) == []


class TestAutoFetcher:

    def test_local_paths_are_not_deleted(self, temp_workspace):
        fetcher = AutoFetcher(GitRepositoryFetcher())
        path = fetcher.fetch(str(temp_workspace))
        fetcher.release(path)
        assert temp_workspace.exists()
