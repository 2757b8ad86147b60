"""CommandRunner -- low-level async command execution."""

from __future__ import annotations

import asyncio
import contextlib
import os
import shlex
from collections.abc import Sequence

from releasegit.exceptions import GitError
from releasegit.git.types import CommandResult, ExecOptions
from releasegit.logging import get_logger

logger = get_logger("git.runner")


def build_env(options: ExecOptions) -> dict[str, str]:
    """Layer the option overrides on top of the current process environment."""
    env = os.environ.copy()
    env.update(options.env)
    return env


def _decode(data: bytes | None) -> str:
    # Strip the final newline only, like execa's stripFinalNewline
    text = (data or b"").decode("utf-8", errors="replace")
    return text.removesuffix("\n").removesuffix("\r")


class CommandRunner:
    """Runs external commands in a repository working directory.

    Every call is a single bounded process execution. The runner holds no
    state besides the executable name, so one instance can be shared by
    all git components.
    """

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    async def run(
        self,
        args: Sequence[str],
        options: ExecOptions | None = None,
        executable: str | None = None,
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            args: Command arguments (without the executable)
            options: Working directory, environment overrides and reject flag
            executable: Program to run, defaults to the runner's executable

        Returns:
            CommandResult with exit code and decoded stdout/stderr

        Raises:
            GitError: If the process cannot be spawned, or exits non-zero
                while ``options.reject`` is set
        """
        options = options or ExecOptions()
        program = executable or self.executable
        cmd = [program, *args]
        command_line = shlex.join(cmd)
        logger.debug(f"Running: {command_line}", extra={"command": command_line})

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(options.cwd) if options.cwd is not None else None,
                env=build_env(options),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GitError(
                f"Failed to run {program}: {e}",
                command=command_line,
                exit_code=None,
            ) from e

        try:
            raw_stdout, raw_stderr = await process.communicate()
        except BaseException:
            # Cancelled (e.g. by asyncio.wait_for): the child must not outlive the call
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()
                logger.debug(f"Killed: {command_line}", extra={"command": command_line})
            raise

        result = CommandResult(
            args=tuple(args),
            exit_code=process.returncode if process.returncode is not None else -1,
            stdout=_decode(raw_stdout),
            stderr=_decode(raw_stderr),
        )

        if options.reject and not result.ok:
            raise GitError(
                f"Command failed with exit code {result.exit_code}: {command_line}\n{result.stderr.strip()}".rstrip(),
                command=command_line,
                exit_code=result.exit_code,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return result
