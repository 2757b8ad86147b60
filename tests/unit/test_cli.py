"""Tests for the releasegit CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

from releasegit import __version__
from releasegit.cli import cli
from releasegit.git import CommitRecord, ReleaseGit
from tests.mocks import MockCommandRunner, MockLogRecordStream

URL = "https://github.com/owner/repo.git"


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    yield
    root = logging.getLogger("releasegit")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True


@pytest.fixture
def stream() -> MockLogRecordStream:
    return MockLogRecordStream(
        [
            CommitRecord(
                sha="c" * 40,
                message="feat: add login\n\nbody\n",
                tags=" (tag: v1.1.0) ",
                committer_date=datetime(2026, 2, 1, tzinfo=timezone.utc),
                author_name="Dev",
                author_email="dev@example.com",
            )
        ]
    )


@pytest.fixture
def git(mock_runner: MockCommandRunner, stream: MockLogRecordStream) -> ReleaseGit:
    return ReleaseGit(runner=mock_runner, stream=stream)


def _invoke(git: ReleaseGit, tmp_path: Path, *args: str):
    return CliRunner().invoke(cli, ["--config", str(tmp_path / "none.yaml"), *args], obj={"git": git})


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


class TestSyncCommand:
    def test_sync_with_remote(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        mock_runner.on("rev-parse", "--abbrev-ref", "HEAD", stdout="main")

        result = _invoke(git, tmp_path, "sync", "main", "--remote", URL, "--ci-branch", "main")

        assert result.exit_code == 0, result.output
        assert ["fetch", "--unshallow", "--tags", URL] in mock_runner.commands
        assert ["fetch", "--unshallow", URL, "+refs/notes/*:refs/notes/*"] in mock_runner.commands
        assert "checkout preserved" in result.output

    def test_sync_uses_origin_url(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        mock_runner.on("config", "--get", stdout=URL)

        result = _invoke(git, tmp_path, "sync", "next", "--no-notes")

        assert result.exit_code == 0, result.output
        assert mock_runner.commands[-1] == [
            "fetch",
            "--unshallow",
            "--tags",
            "--update-head-ok",
            URL,
            "+refs/heads/next:refs/heads/next",
        ]
        assert not any("+refs/notes/*:refs/notes/*" in args for args in mock_runner.commands)

    def test_sync_without_remote_is_usage_error(
        self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path
    ) -> None:
        mock_runner.on("config", exit_code=1)
        result = _invoke(git, tmp_path, "sync", "main")
        assert result.exit_code == 2
        assert "No remote URL" in result.output

    def test_sync_failure_exits_1(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        mock_runner.on("fetch", exit_code=128, stderr="fatal: unable to access")
        result = _invoke(git, tmp_path, "sync", "main", "--remote", URL)
        assert result.exit_code == 1


class TestCommitsCommand:
    def test_commits_json(self, git: ReleaseGit, stream: MockLogRecordStream, tmp_path: Path) -> None:
        result = _invoke(git, tmp_path, "commits", "HEAD", "--from", "a" * 40, "--json")

        assert result.exit_code == 0, result.output
        assert stream.ranges == [f"{'a' * 40}..HEAD"]
        payload = json.loads(result.output)
        assert payload[0]["message"] == "feat: add login\n\nbody"
        assert payload[0]["tags"] == "(tag: v1.1.0)"
        assert payload[0]["committer_date"] == "2026-02-01T00:00:00+00:00"

    def test_commits_table(self, git: ReleaseGit, tmp_path: Path) -> None:
        result = _invoke(git, tmp_path, "commits")
        assert result.exit_code == 0, result.output
        assert "feat: add login" in result.output
        assert "1 commits" in result.output


class TestNotesCommands:
    def test_tags_notes_json(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        mock_runner.on("log", stdout='(tag: v1.0.0, tag: latest)\t{"channels":[null]}')

        result = _invoke(git, tmp_path, "tags-notes", "--json")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "v1.0.0": {"channels": [None]},
            "latest": {"channels": [None]},
        }

    def test_tags_notes_empty(self, git: ReleaseGit, tmp_path: Path) -> None:
        result = _invoke(git, tmp_path, "tags-notes")
        assert result.exit_code == 0
        assert "No tag notes found" in result.output

    def test_add_note_and_push(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        result = _invoke(git, tmp_path, "add-note", "v1.0.0", '{"channels": ["next"]}', "--push", URL)

        assert result.exit_code == 0, result.output
        assert mock_runner.commands == [
            ["notes", "--ref", "semantic-release-v1.0.0", "add", "-f", "-m", '{"channels":["next"]}', "v1.0.0"],
            ["push", URL, "refs/notes/semantic-release-v1.0.0"],
        ]

    def test_add_note_invalid_json(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        result = _invoke(git, tmp_path, "add-note", "v1.0.0", "{not json")
        assert result.exit_code == 2
        assert mock_runner.commands == []


class TestStatusCommand:
    def test_status(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        mock_runner.on("rev-parse", "--abbrev-ref", "HEAD", stdout="HEAD")
        mock_runner.on("rev-parse", "HEAD", stdout="d" * 40)
        mock_runner.on("config", stdout=URL)

        result = _invoke(git, tmp_path, "status")

        assert result.exit_code == 0, result.output
        assert URL in result.output
        assert "d" * 40 in result.output
        assert "Detached: true" in result.output

    def test_status_not_a_repo(self, git: ReleaseGit, mock_runner: MockCommandRunner, tmp_path: Path) -> None:
        mock_runner.on("rev-parse", "--git-dir", exit_code=128)
        result = _invoke(git, tmp_path, "status")
        assert result.exit_code == 1
        assert "Not a git repository" in result.output
