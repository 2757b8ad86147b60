"""ReleaseGit -- one entry point over all git components for a repository."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from releasegit.config import GitSettings
from releasegit.git.commits import CommitRangeReader
from releasegit.git.log_stream import LogRecordStream
from releasegit.git.notes import TagNotesExtractor
from releasegit.git.refs import RefOperations
from releasegit.git.runner import CommandRunner
from releasegit.git.sync import SyncController
from releasegit.git.types import CommitRecord, ExecOptions, FetchPlan, ProbeResult, TagNotesMap


class ReleaseGit:
    """Git facade bound to one working directory.

    Holds no locks: callers must serialize mutating calls (synchronize,
    tag, push, add_note) against the same working directory. Read-only
    queries may run concurrently with each other.

    Example:
        git = ReleaseGit(Path("."))
        await git.synchronize(url, "main", ci_branch="main")
        await git.synchronize_notes(url)
        commits = await git.get_commits(last_release_sha, await git.get_git_head())
        notes = await git.get_tags_notes()
    """

    def __init__(
        self,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        settings: GitSettings | None = None,
        runner: CommandRunner | None = None,
        stream: LogRecordStream | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or GitSettings()
        self.options = ExecOptions(cwd=cwd, env=dict(env or {}))
        self.runner = runner or CommandRunner(self.settings.executable)
        self.sync = SyncController(self.runner, logger)
        self.notes = TagNotesExtractor(self.runner, self.settings.note_ref, logger)
        self.refs = RefOperations(self.runner, logger)
        self.commits = CommitRangeReader(stream or LogRecordStream(self.settings.executable))

    # Synchronization

    async def synchronize(self, remote_url: str, branch: str, ci_branch: str | None = None) -> FetchPlan:
        return await self.sync.synchronize(
            remote_url, branch, ci_branch if ci_branch is not None else self.settings.ci_branch, self.options
        )

    async def synchronize_notes(self, remote_url: str) -> bool:
        return await self.sync.synchronize_notes(remote_url, self.options)

    async def is_detached_head(self) -> ProbeResult:
        return await self.sync.is_detached_head(self.options)

    # History and notes

    async def get_commits(self, from_sha: str | None, to_sha: str) -> list[CommitRecord]:
        return await self.commits.get_commits(from_sha, to_sha, self.options)

    async def get_tags_notes(self) -> TagNotesMap:
        return await self.notes.get_tags_notes(self.options)

    async def add_note(self, note: Any, ref: str) -> None:
        await self.notes.add_note(note, ref, self.options)

    async def push_notes(self, remote_url: str, ref: str) -> None:
        await self.notes.push_notes(remote_url, ref, self.options)

    # Refs and tags

    async def get_tag_head(self, tag_name: str) -> str:
        return await self.refs.get_tag_head(tag_name, self.options)

    async def get_tags(self, branch: str) -> list[str]:
        return await self.refs.get_tags(branch, self.options)

    async def get_branches(self, remote_url: str) -> list[str]:
        return await self.refs.get_branches(remote_url, self.options)

    async def get_git_head(self) -> str:
        return await self.refs.get_git_head(self.options)

    async def get_tag_ref(self, tag_name: str) -> str:
        return await self.refs.get_tag_ref(tag_name, self.options)

    async def is_branch_up_to_date(self, remote_url: str, branch: str) -> bool:
        return await self.refs.is_branch_up_to_date(remote_url, branch, self.options)

    async def verify_auth(self, remote_url: str, branch: str) -> None:
        await self.refs.verify_auth(remote_url, branch, self.options)

    async def tag(self, tag_name: str, ref: str) -> None:
        await self.refs.tag(tag_name, ref, self.options)

    async def push(self, remote_url: str) -> None:
        await self.refs.push(remote_url, self.options)

    async def is_ref_exists(self, ref: str) -> ProbeResult:
        return await self.refs.is_ref_exists(ref, self.options)

    async def is_git_repo(self) -> ProbeResult:
        return await self.refs.is_git_repo(self.options)

    async def verify_tag_name(self, tag_name: str) -> ProbeResult:
        return await self.refs.verify_tag_name(tag_name, self.options)

    async def verify_branch_name(self, branch: str) -> ProbeResult:
        return await self.refs.verify_branch_name(branch, self.options)

    async def repo_url(self) -> str | None:
        return await self.refs.repo_url(self.options)
