"""CommitRangeReader -- commit history between two shas."""

from __future__ import annotations

import dataclasses

from releasegit.git.log_stream import LogRecordStream
from releasegit.git.types import CommitRecord, ExecOptions


def revision_range(from_sha: str | None, to_sha: str) -> str:
    """Build the log range: ``from..to`` when a lower bound is given, else ``to``."""
    return f"{from_sha}..{to_sha}" if from_sha else to_sha


def normalize(record: CommitRecord) -> CommitRecord:
    """Trim the message body and raw decoration string."""
    return dataclasses.replace(record, message=record.message.strip(), tags=record.tags.strip())


class CommitRangeReader:
    """Reads the commits reachable from ``to_sha`` and not from ``from_sha``."""

    def __init__(self, stream: LogRecordStream) -> None:
        self.stream = stream

    async def get_commits(
        self, from_sha: str | None, to_sha: str, options: ExecOptions | None = None
    ) -> list[CommitRecord]:
        """Retrieve a range of commits.

        Args:
            from_sha: Exclusive lower bound, or None for the full ancestry of ``to_sha``
            to_sha: Inclusive upper bound
            options: Working directory and environment overrides

        Returns:
            Commits newest first, with trimmed message and tags

        Raises:
            GitError: If the log cannot be read
        """
        return [
            normalize(record)
            async for record in self.stream.records(revision_range(from_sha, to_sha), options)
        ]
