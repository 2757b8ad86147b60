"""releasegit constants."""

# Notes namespace prefix. Notes for ref R live under refs/notes/<prefix>-<R>;
# older releases wrote to refs/notes/<prefix> directly.
GIT_NOTE_REF = "semantic-release"

# `git rev-parse --abbrev-ref HEAD` prints this when no branch is checked out
HEAD_SENTINEL = "HEAD"

NOTES_REFSPEC = "+refs/notes/*:refs/notes/*"

# Terminates every field of the commit log format; git rejects NUL in messages
FIELD_TERMINATOR = "\x00"

DEFAULT_CONFIG_PATH = ".releasegit.yaml"
DEFAULT_GIT_EXECUTABLE = "git"
