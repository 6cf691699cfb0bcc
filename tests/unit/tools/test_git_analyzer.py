import shutil

import pytest
from git import Actor, Repo

from navvi.tools.git_analyzer import GitHistoryAnalyzer

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")

AUTHOR = Actor("Navvi Tests", "tests@example.com")


def commit(repo, root, files, message):
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    repo.index.add(list(files))
    repo.index.commit(message, author=AUTHOR, committer=AUTHOR)


class TestGitHistoryAnalyzer:

    def test_counts_commits_per_file(self, temp_workspace):
        repo = Repo.init(temp_workspace)
        commit(repo, temp_workspace, {"src/a.js": "1", "src/b.js": "1"}, "initial")
        commit(repo, temp_workspace, {"src/a.js": "2"}, "change a")
        commit(repo, temp_workspace, {"src/a.js": "3", "src/b.js": "2"}, "change both")
        repo.close()

        history = GitHistoryAnalyzer().history(temp_workspace)
        assert history == {"src/a.js": 3, "src/b.js": 2}

    def test_max_commits(self, temp_workspace):
        repo = Repo.init(temp_workspace)
        commit(repo, temp_workspace, {"a.js": "1"}, "one")
        commit(repo, temp_workspace, {"a.js": "2"}, "two")
        repo.close()

        assert GitHistoryAnalyzer(max_commits=1).history(temp_workspace) == {"a.js": 1}

    def test_not_a_repository(self, temp_workspace):
        assert GitHistoryAnalyzer().history(temp_workspace) == {}

    def test_repository_without_commits(self, temp_workspace):
        Repo.init(temp_workspace).close()
        assert GitHistoryAnalyzer().history(temp_workspace) == {}
