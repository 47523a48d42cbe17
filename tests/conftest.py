"""Shared test fixtures — sample git output, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

from gitglass.git.repository import Repository


def git(repo: Path, *args: str) -> str:
    """Run git in *repo* and return stdout, failing the test on error."""
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    )
    return result.stdout


@pytest.fixture
def sample_branch_output() -> str:
    """``git branch -a`` with a current branch and remote-tracking refs."""
    return textwrap.dedent("""\
          develop
        * main
          remotes/origin/HEAD -> origin/main
          remotes/origin/main
          remotes/upstream/feature/login
    """)


@pytest.fixture
def sample_detached_branch_output() -> str:
    return textwrap.dedent("""\
        * (HEAD detached at 3f2a1bc)
          main
    """)


@pytest.fixture
def sample_log_output() -> str:
    """NUL-terminated ``git log`` records with unit-separated fields."""
    records = [
        "\x1f".join([
            "a3f5c2e9b1d4f6a8c0e2b4d6f8a0c2e4b6d8f0a2",
            "Ada Lovelace",
            "ada@example.com",
            "2024-03-01T10:15:00+00:00",
            "Fix parser | handle pipes",
        ]),
        "\x1f".join([
            "0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5e6f7a8b9c",
            "Alan Turing",
            "alan@example.com",
            "2024-02-28T09:00:00+00:00",
            "Initial commit",
        ]),
    ]
    return "\x00".join(records)


@pytest.fixture
def sample_status_output() -> str:
    """Newline-separated porcelain v1 status."""
    return textwrap.dedent("""\
        M  staged.py
         M foo.txt
        MM both.py
        A  bar.txt
         D gone.txt
        D  removed.txt
        ?? baz.txt
    """)


@pytest.fixture
def sample_diff() -> str:
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        index 1234567..abcdef0 100644
        --- a/hello.py
        +++ b/hello.py
        @@ -1,3 +1,3 @@
         def greet(name):
        -    return "Hi " + name
        +    return f"Hello, {name}!"

    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository on branch ``main`` with one commit."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """A freshly initialised repository without any commits."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    return tmp_path


@pytest.fixture
def repo(tmp_git_repo: Path) -> Repository:
    return Repository(tmp_git_repo)
