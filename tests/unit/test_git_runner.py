"""Tests for releasegit.git.runner -- async command execution."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

from releasegit.exceptions import GitError
from releasegit.git.runner import CommandRunner, build_env
from releasegit.git.types import ExecOptions

PY = sys.executable


@pytest.fixture
def runner() -> CommandRunner:
    return CommandRunner(PY)


class TestCommandRunner:
    async def test_captures_stdout_without_final_newline(self, runner: CommandRunner) -> None:
        result = await runner.run(["-c", "print('hello')"])
        assert result.ok
        assert result.stdout == "hello"
        assert result.args == ("-c", "print('hello')")

    async def test_keeps_inner_newlines(self, runner: CommandRunner) -> None:
        result = await runner.run(["-c", "print('a\\n\\nb')"])
        assert result.stdout == "a\n\nb"

    async def test_non_zero_exit_raises_with_stderr(self, runner: CommandRunner) -> None:
        script = "import sys; sys.stderr.write('fatal: boom\\n'); sys.exit(3)"
        with pytest.raises(GitError) as exc_info:
            await runner.run(["-c", script])

        error = exc_info.value
        assert error.exit_code == 3
        assert error.stderr == "fatal: boom"
        assert "fatal: boom" in str(error)
        assert error.command is not None and PY in error.command

    async def test_reject_false_returns_result(self, runner: CommandRunner) -> None:
        result = await runner.run(["-c", "import sys; sys.exit(1)"], ExecOptions(reject=False))
        assert result.exit_code == 1
        assert not result.ok

    async def test_cwd(self, runner: CommandRunner, tmp_path: Path) -> None:
        result = await runner.run(["-c", "import os; print(os.getcwd())"], ExecOptions(cwd=tmp_path))
        assert Path(result.stdout).resolve() == tmp_path.resolve()

    async def test_env_overrides_extend_process_env(
        self, runner: CommandRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("RELEASEGIT_BASE", "base")
        script = "import os; print(os.environ['RELEASEGIT_BASE'], os.environ['RELEASEGIT_EXTRA'])"
        result = await runner.run(["-c", script], ExecOptions(env={"RELEASEGIT_EXTRA": "extra"}))
        assert result.stdout == "base extra"

    async def test_missing_executable_raises(self) -> None:
        runner = CommandRunner("releasegit-no-such-binary")
        with pytest.raises(GitError) as exc_info:
            await runner.run(["--version"], ExecOptions(reject=False))
        assert exc_info.value.exit_code is None

    async def test_executable_override(self) -> None:
        result = await CommandRunner("git").run(["-c", "print(1)"], executable=PY)
        assert result.stdout == "1"

    async def test_timeout_kills_child_process(self, runner: CommandRunner, tmp_path: Path) -> None:
        marker = tmp_path / "still-running"
        script = f"import pathlib, time; time.sleep(1.5); pathlib.Path({str(marker)!r}).write_text('late')"

        with pytest.raises(TimeoutError):
            await asyncio.wait_for(runner.run(["-c", script]), timeout=0.3)

        await asyncio.sleep(2.0)
        assert not marker.exists()

    async def test_independent_calls_run_concurrently(self, runner: CommandRunner) -> None:
        results = await asyncio.gather(*(runner.run(["-c", f"print({i})"]) for i in range(3)))
        assert [r.stdout for r in results] == ["0", "1", "2"]


def test_build_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELEASEGIT_X", "old")
    env = build_env(ExecOptions(env={"RELEASEGIT_X": "new"}))
    assert env["RELEASEGIT_X"] == "new"
