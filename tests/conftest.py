"""Shared test fixtures and configuration."""

import subprocess
import tempfile
from pathlib import Path

import pytest


def git(repo: Path, *args: str) -> str:
    """Run a git command in a test repository and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it, and return the new commit sha."""
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def empty_repo(tmp_path):
    """Create an initialized git repository with no commits."""
    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    git(repo_dir, "init", "-q")
    git(repo_dir, "config", "user.email", "test@example.com")
    git(repo_dir, "config", "user.name", "Test User")
    git(repo_dir, "config", "commit.gpgsign", "false")

    return repo_dir


@pytest.fixture
def temp_repo(empty_repo):
    """Create a git repository with one committed five-line file."""
    commit_file(empty_repo, "app.txt", "one\ntwo\nthree\nfour\nfive\n", "Initial commit")
    return empty_repo


@pytest.fixture
def sample_unpushed_log():
    """Sample `git log -p` output of unpushed commits."""
    return """1111111111111111111111111111111111111111 Add parser
diff --git a/parser.py b/parser.py
new file mode 100644
--- /dev/null
+++ b/parser.py
@@ -0,0 +1,2 @@
+def parse():
+    pass

2222222222222222222222222222222222222222 fix typo
diff --git a/parser.py b/parser.py
--- a/parser.py
+++ b/parser.py
@@ -1,2 +1,2 @@
 def parse():
-    pass
+    return None
"""


@pytest.fixture
def sample_commit_plan_response():
    """Sample raw model reply for a commit plan (with markdown fences)."""
    return """```json
{
  "files": [
    {"path": "app.txt", "hunks": [{"old_start": 2, "old_end": 2, "new_start": 2, "new_end": 2}]},
    {"path": "README.md"}
  ],
  "commit_message": "Update greeting",
  "amend": false
}
```"""


@pytest.fixture
def run_git():
    """Helper that runs git in a test repository."""
    return git


@pytest.fixture
def make_commit():
    """Helper that writes and commits a file."""
    return commit_file


@pytest.fixture
def tracked_repo(temp_repo, run_git, make_commit, monkeypatch):
    """Repository whose branch tracks a local `base` branch two commits behind."""
    run_git(temp_repo, "branch", "base")
    run_git(temp_repo, "branch", "--set-upstream-to=base")
    make_commit(temp_repo, "a.txt", "a\n", "Add a")
    make_commit(temp_repo, "b.txt", "b\n", "Add b\n\nWith a body.")
    monkeypatch.chdir(temp_repo)
    return temp_repo
