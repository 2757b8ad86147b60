"""Pytest configuration and fixtures for releasegit tests."""

import shutil
from pathlib import Path

import pytest

from tests.helpers.git_repo import GIT_ENV, commit, run_git
from tests.mocks import MockCommandRunner


@pytest.fixture
def git_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point git at an empty HOME and a fixed identity."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    for key, value in GIT_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def tmp_repo(tmp_path: Path, git_env: None) -> Path:
    """Create a temporary git repository on ``main`` with one commit.

    Returns:
        Path to the temporary repository
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git("init", "-q", "-b", "main", cwd=repo)
    run_git("config", "user.email", "test@test.com", cwd=repo)
    run_git("config", "user.name", "Test", cwd=repo)

    (repo / "README.md").write_text("# Test Repo")
    run_git("add", "-A", cwd=repo)
    run_git("commit", "-q", "-m", "Initial commit", cwd=repo)
    return repo


@pytest.fixture
def bare_remote(tmp_path: Path, tmp_repo: Path) -> str:
    """Create a bare remote holding ``tmp_repo``'s main branch plus two more commits.

    Returns:
        ``file://`` URL of the remote (required for shallow clones)
    """
    remote = tmp_path / "remote.git"
    run_git("init", "-q", "--bare", "-b", "main", str(remote))
    commit(tmp_repo, "feat: second", "second.txt")
    commit(tmp_repo, "fix: third", "third.txt")
    run_git("remote", "add", "origin", str(remote), cwd=tmp_repo)
    run_git("push", "-q", "origin", "main", cwd=tmp_repo)
    return remote.as_uri()


@pytest.fixture
def shallow_clone(tmp_path: Path, bare_remote: str) -> Path:
    """Clone ``bare_remote`` with depth 1, as CI systems do."""
    clone = tmp_path / "clone"
    run_git("clone", "-q", "--depth", "1", bare_remote, str(clone))
    run_git("config", "user.email", "test@test.com", cwd=clone)
    run_git("config", "user.name", "Test", cwd=clone)
    return clone


@pytest.fixture
def mock_runner() -> MockCommandRunner:
    """Scripted command runner; unscripted commands succeed with no output."""
    return MockCommandRunner()
