"""releasegit CLI commands."""

from releasegit.commands.history import commits, status
from releasegit.commands.notes import add_note, tags_notes
from releasegit.commands.sync import sync

__all__ = [
    "add_note",
    "commits",
    "status",
    "sync",
    "tags_notes",
]
