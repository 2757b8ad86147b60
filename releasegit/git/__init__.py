"""releasegit git package -- release-oriented git operations.

Re-exports core classes for convenient access:
    from releasegit.git import ReleaseGit, CommandRunner, CommitRecord
"""

from releasegit.git.commits import CommitRangeReader
from releasegit.git.facade import ReleaseGit
from releasegit.git.log_stream import LogRecordStream
from releasegit.git.notes import TagNotesExtractor, extract_git_log_tags, parse_tags_notes
from releasegit.git.refs import RefOperations
from releasegit.git.runner import CommandRunner
from releasegit.git.sync import SyncController
from releasegit.git.types import (
    CommandResult,
    CommitRecord,
    ExecOptions,
    FetchPlan,
    ProbeResult,
    TagNotesMap,
    freeze,
    thaw,
)

__all__ = [
    "ReleaseGit",
    "CommandRunner",
    "LogRecordStream",
    "SyncController",
    "TagNotesExtractor",
    "CommitRangeReader",
    "RefOperations",
    "extract_git_log_tags",
    "parse_tags_notes",
    "CommandResult",
    "CommitRecord",
    "ExecOptions",
    "FetchPlan",
    "ProbeResult",
    "TagNotesMap",
    "freeze",
    "thaw",
]
