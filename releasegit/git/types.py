"""Shared data types for releasegit git operations."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any

# Frozen JSON value: MappingProxyType for objects, tuple for arrays
NoteValue = Any

# Read-only tag name -> note value snapshot
TagNotesMap = Mapping[str, NoteValue]


@dataclass(frozen=True)
class ExecOptions:
    """Options applied to every git invocation.

    Attributes:
        cwd: Working directory of the repository
        env: Environment overrides, layered on top of the process environment
        reject: Raise GitError when the command exits non-zero
    """

    cwd: str | Path | None = None
    env: Mapping[str, str] = field(default_factory=dict)
    reject: bool = True

    def merge(self, **overrides: Any) -> ExecOptions:
        """Return a copy of these options with the given fields replaced."""
        return dataclasses.replace(self, **overrides)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command invocation."""

    args: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class CommitRecord:
    """A commit as read from the log.

    ``tags`` is the raw decoration string (e.g. ``(HEAD -> main, tag: v1.0.0)``),
    not a parsed list.
    """

    sha: str
    message: str
    tags: str
    committer_date: datetime
    author_name: str = ""
    author_email: str = ""


class ProbeResult(StrEnum):
    """Outcome of a best-effort check.

    INDETERMINATE means the check itself could not run or answer; it is
    falsy, like FALSE.
    """

    TRUE = "true"
    FALSE = "false"
    INDETERMINATE = "indeterminate"

    def __bool__(self) -> bool:
        return self is ProbeResult.TRUE

    @classmethod
    def from_bool(cls, value: bool) -> ProbeResult:
        return cls.TRUE if value else cls.FALSE


class FetchAttempt(StrEnum):
    """Steps of the degrading fetch sequence."""

    UNSHALLOW = "unshallow"
    PLAIN = "plain"


class FinalFailure(StrEnum):
    """What happens when the last fetch attempt fails."""

    RAISE = "raise"
    IGNORE = "ignore"


@dataclass(frozen=True)
class FetchPlan:
    """Refspec strategy for one synchronization call.

    Computed fresh for every call from the target branch, the CI trigger
    branch and the detached-HEAD probe. Shallowness is not probed: the
    unshallow attempt failing is how a full clone is detected.
    """

    remote_url: str
    branch: str
    on_trigger_branch: bool
    detached: ProbeResult

    @property
    def preserve_head(self) -> bool:
        """Fetch without a refspec so the CI-managed checkout is left alone."""
        return self.on_trigger_branch and not self.detached

    @property
    def refspec(self) -> str | None:
        if self.preserve_head:
            return None
        return f"+refs/heads/{self.branch}:refs/heads/{self.branch}"

    def fetch_args(self, attempt: FetchAttempt) -> list[str]:
        """Build the ``git fetch`` arguments for the given attempt."""
        args = ["fetch"]
        if attempt is FetchAttempt.UNSHALLOW:
            args.append("--unshallow")
        args.append("--tags")
        if self.preserve_head:
            args.append(self.remote_url)
        else:
            args.extend(["--update-head-ok", self.remote_url, self.refspec])
        return args


def freeze(value: Any) -> NoteValue:
    """Recursively freeze a parsed JSON value."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: NoteValue) -> Any:
    """Convert a frozen note value back to plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value
