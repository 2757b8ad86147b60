"""LogRecordStream -- lazy iteration over ``git log`` records.

Every field is terminated by a NUL byte, which git refuses to store in a
commit message, so message bodies may hold any other control character.
Records are delimited by field count rather than by a separator.
"""

from __future__ import annotations

import asyncio
import shlex
from collections.abc import AsyncIterator, Sequence
from datetime import datetime

from releasegit.constants import DEFAULT_GIT_EXECUTABLE, FIELD_TERMINATOR
from releasegit.exceptions import GitError
from releasegit.git.runner import build_env
from releasegit.git.types import CommitRecord, ExecOptions
from releasegit.logging import get_logger

logger = get_logger("git.log_stream")

# Field name -> git pretty-format placeholder, in output order
LOG_FIELDS: dict[str, str] = {
    "sha": "%H",
    "message": "%B",
    "tags": "%d",
    "committer_date": "%cI",
    "author_name": "%an",
    "author_email": "%ae",
}

_NUL = FIELD_TERMINATOR.encode()
_CHUNK_SIZE = 64 * 1024


def log_format() -> str:
    """Build the ``--format`` value: each placeholder followed by ``%x00``."""
    return "".join(f"{placeholder}%x00" for placeholder in LOG_FIELDS.values())


def parse_record(fields: Sequence[str]) -> CommitRecord:
    """Build a record from one commit's raw field values.

    The sha may carry the newline git prints between commits. Message and
    tags are kept raw; trimming is left to the consumer.

    Raises:
        ValueError: On a wrong field count or a malformed date
    """
    if len(fields) != len(LOG_FIELDS):
        raise ValueError(f"Expected {len(LOG_FIELDS)} log fields, got {len(fields)}")

    values = dict(zip(LOG_FIELDS, fields, strict=True))
    return CommitRecord(
        sha=values["sha"].strip(),
        message=values["message"],
        tags=values["tags"],
        committer_date=datetime.fromisoformat(values["committer_date"].strip()),
        author_name=values["author_name"].strip(),
        author_email=values["author_email"].strip(),
    )


class LogRecordStream:
    """Streams commit records from ``git log`` as the process produces them."""

    def __init__(self, executable: str = DEFAULT_GIT_EXECUTABLE) -> None:
        self.executable = executable

    async def records(
        self, revision_range: str, options: ExecOptions | None = None
    ) -> AsyncIterator[CommitRecord]:
        """Yield commit records for a revision range, newest first.

        Args:
            revision_range: Range expression, e.g. ``"<from>..<to>"`` or ``"<to>"``
            options: Working directory and environment overrides

        Raises:
            GitError: If ``git log`` cannot be spawned or exits non-zero
        """
        options = options or ExecOptions()
        cmd = [self.executable, "log", f"--format={log_format()}", revision_range, "--"]
        command_line = shlex.join(cmd)
        logger.debug(f"Streaming: {command_line}", extra={"command": command_line})

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
            raise GitError(f"Failed to run {self.executable}: {e}", command=command_line) from e

        assert process.stdout is not None and process.stderr is not None
        stderr_task = asyncio.create_task(process.stderr.read())
        finished = False

        try:
            buffer = b""
            fields: list[str] = []
            while chunk := await process.stdout.read(_CHUNK_SIZE):
                buffer += chunk
                *complete, buffer = buffer.split(_NUL)
                for raw in complete:
                    fields.append(raw.decode("utf-8", errors="replace"))
                    if len(fields) == len(LOG_FIELDS):
                        yield self._parse(fields, command_line)
                        fields = []

            exit_code = await process.wait()
            stderr = (await stderr_task).decode("utf-8", errors="replace").strip()
            finished = True

            if exit_code != 0:
                raise GitError(
                    f"Command failed with exit code {exit_code}: {command_line}\n{stderr}".rstrip(),
                    command=command_line,
                    exit_code=exit_code,
                    stderr=stderr,
                )

            if fields or buffer.strip():
                raise GitError(
                    f"Truncated git log output: {len(fields)} of {len(LOG_FIELDS)} fields",
                    command=command_line,
                    exit_code=exit_code,
                )
        finally:
            if not finished:
                # Consumer stopped early or parsing failed
                if process.returncode is None:
                    process.kill()
                    await process.wait()
                stderr_task.cancel()

    @staticmethod
    def _parse(fields: Sequence[str], command_line: str) -> CommitRecord:
        try:
            return parse_record(fields)
        except ValueError as e:
            raise GitError(f"Cannot parse git log output: {e}", command=command_line) from e
