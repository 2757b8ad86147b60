"""Tag-notes extraction and release-note writing.

Release metadata is stored as a JSON git note on the tagged commit, in a
per-tag notes namespace ``refs/notes/<prefix>-<tag>``. Reading them back
uses a single log query over all tags::

    git log --tags=* --decorate-refs=refs/tags/* --no-walk \\
        --format=%d%x09%N --notes=refs/notes/<prefix>*

which prints one ``<decoration>\\t<note>`` line per tagged commit::

     (tag: v1.2.3)
     (tag: v2.0.0)	{"channels":[null]}
     (tag: v3.0.0, tag: 5833/merge)	{"channels":["next"]}
"""

from __future__ import annotations

import json
import logging
import re
from types import MappingProxyType
from typing import Any

from releasegit.constants import GIT_NOTE_REF
from releasegit.git.runner import CommandRunner
from releasegit.git.types import ExecOptions, NoteValue, TagNotesMap, freeze, thaw
from releasegit.logging import get_logger

_TAG_RE = re.compile(r"tag: ([^,)]+)")


def extract_git_log_tags(decoration: str) -> list[str]:
    """Extract tag names from a log decoration string, left to right.

    Non-tag decorations (``HEAD -> main``, remote-tracking branches) are
    ignored::

        >>> extract_git_log_tags("(HEAD -> main, tag: v1.0.0, tag: 5833/merge)")
        ['v1.0.0', '5833/merge']
    """
    return [name.strip() for name in _TAG_RE.findall(decoration) if name.strip()]


def tags_notes_args(note_ref: str = GIT_NOTE_REF) -> list[str]:
    """Arguments of the tag-notes log query."""
    return [
        "log",
        "--tags=*",
        # Only show tag refs in %d
        "--decorate-refs=refs/tags/*",
        # Only the tagged commits, not their ancestry
        "--no-walk",
        "--format=%d%x09%N",
        # Matches both the legacy <prefix> and the per-tag <prefix>-<tag> namespaces
        f"--notes=refs/notes/{note_ref}*",
    ]


def parse_tags_notes(output: str, logger: logging.Logger | None = None) -> TagNotesMap:
    """Parse tag-notes log output into a read-only tag -> note mapping.

    Each line is handled on its own: a line without tags or with a
    malformed note is logged and skipped. All tags on one line share the
    same frozen note value, and a later line wins for a repeated tag.
    """
    log = logger or get_logger("git.notes")
    notes: dict[str, NoteValue] = {}

    for line in output.splitlines():
        if not line.strip():
            continue

        tag_part, _, note_part = line.strip().partition("\t")
        tags = extract_git_log_tags(tag_part)
        if not tags:
            log.debug(f"Cannot parse tags from line: {line!r}")
            continue

        try:
            note = freeze(json.loads(note_part))
        except json.JSONDecodeError as e:
            log.debug(f"Cannot parse note for {', '.join(tags)}: {e}")
            continue

        for tag in tags:
            notes[tag] = note

    return MappingProxyType(notes)


def note_ref(ref: str, prefix: str = GIT_NOTE_REF) -> str:
    """Notes namespace (without ``refs/notes/``) holding the note for ``ref``."""
    return f"{prefix}-{ref}"


class TagNotesExtractor:
    """Reads and writes the JSON release notes attached to tags."""

    def __init__(
        self,
        runner: CommandRunner,
        note_prefix: str = GIT_NOTE_REF,
        logger: logging.Logger | None = None,
    ) -> None:
        self.runner = runner
        self.note_prefix = note_prefix
        self.logger = logger or get_logger("git.notes")

    async def get_tags_notes(self, options: ExecOptions | None = None) -> TagNotesMap:
        """Map every tag carrying a release note to its parsed note.

        Tags without a note are absent from the result.

        Raises:
            GitError: If the log query itself fails
        """
        result = await self.runner.run(tags_notes_args(self.note_prefix), options)
        return parse_tags_notes(result.stdout, self.logger)

    async def add_note(self, note: Any, ref: str, options: ExecOptions | None = None) -> None:
        """Attach ``note`` as JSON to ``ref``, replacing any existing note.

        Raises:
            GitError: If the note cannot be written
        """
        payload = json.dumps(thaw(note), separators=(",", ":"))
        await self.runner.run(
            ["notes", "--ref", note_ref(ref, self.note_prefix), "add", "-f", "-m", payload, ref],
            options,
        )
        self.logger.debug(f"Added note to {ref}: {payload}")

    async def push_notes(self, remote_url: str, ref: str, options: ExecOptions | None = None) -> None:
        """Push the notes namespace of ``ref`` to the remote.

        Raises:
            GitError: If the push fails
        """
        await self.runner.run(
            ["push", remote_url, f"refs/notes/{note_ref(ref, self.note_prefix)}"], options
        )
        self.logger.info(f"Pushed notes for {ref}", extra={"remote": remote_url, "tag": ref})
