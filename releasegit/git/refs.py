"""RefOperations -- point queries and ref writes on the repository.

Each operation is one git invocation. Operations documented as raising
propagate GitError with the command's stderr; probes return a
ProbeResult (or None) and never raise.
"""

from __future__ import annotations

import logging
import re

from releasegit.exceptions import GitError
from releasegit.git.runner import CommandRunner
from releasegit.git.types import ExecOptions, ProbeResult
from releasegit.logging import get_logger

_REMOTE_HEAD_RE = re.compile(r"^.+refs/heads/(?P<branch>.+)$")
_LEADING_SHA_RE = re.compile(r"^(?P<ref>\w+)?")


def _lines(output: str) -> list[str]:
    return [line.strip() for line in output.split("\n") if line.strip()]


class RefOperations:
    """Tag, branch and ref queries built directly on the command runner."""

    def __init__(self, runner: CommandRunner, logger: logging.Logger | None = None) -> None:
        self.runner = runner
        self.logger = logger or get_logger("git.refs")

    async def _probe(self, args: list[str], options: ExecOptions | None) -> ProbeResult:
        """Run a check whose exit code is the answer."""
        options = options or ExecOptions()
        try:
            result = await self.runner.run(args, options.merge(reject=False))
        except GitError as e:
            self.logger.debug(e)
            return ProbeResult.INDETERMINATE

        if not result.ok:
            self.logger.debug(f"git {' '.join(args)} exited {result.exit_code}: {result.stderr}")
        return ProbeResult.from_bool(result.ok)

    # -- queries that raise --------------------------------------------------

    async def get_tag_head(self, tag_name: str, options: ExecOptions | None = None) -> str:
        """Get the commit sha a tag points to.

        Raises:
            GitError: If the tag does not exist
        """
        return (await self.runner.run(["rev-list", "-1", tag_name], options)).stdout

    async def get_tags(self, branch: str, options: ExecOptions | None = None) -> list[str]:
        """List the tags reachable from ``branch``."""
        return _lines((await self.runner.run(["tag", "--merged", branch], options)).stdout)

    async def get_branches(self, remote_url: str, options: ExecOptions | None = None) -> list[str]:
        """List the branch names of the remote repository."""
        output = (await self.runner.run(["ls-remote", "--heads", remote_url], options)).stdout
        branches = []
        for line in _lines(output):
            match = _REMOTE_HEAD_RE.match(line)
            if match:
                branches.append(match.group("branch"))
        return branches

    async def get_git_head(self, options: ExecOptions | None = None) -> str:
        """Get the sha of the HEAD commit."""
        return (await self.runner.run(["rev-parse", "HEAD"], options)).stdout

    async def get_tag_ref(self, tag_name: str, options: ExecOptions | None = None) -> str:
        """Get the ref hash of a tag (the tag object for annotated tags)."""
        return (await self.runner.run(["show-ref", tag_name, "--hash"], options)).stdout

    async def is_branch_up_to_date(
        self, remote_url: str, branch: str, options: ExecOptions | None = None
    ) -> bool:
        """Check that local HEAD is the same commit as the remote branch head."""
        head = await self.get_git_head(options)
        remote = await self.runner.run(["ls-remote", "--heads", remote_url, branch], options)
        match = _LEADING_SHA_RE.match(remote.stdout)
        return match is not None and head == match.group("ref")

    # -- writes ----------------------------------------------------------------

    async def verify_auth(self, remote_url: str, branch: str, options: ExecOptions | None = None) -> None:
        """Verify push access with a dry-run push of HEAD to ``branch``.

        Raises:
            GitError: If not authorized to push
        """
        try:
            await self.runner.run(
                ["push", "--dry-run", "--no-verify", remote_url, f"HEAD:{branch}"], options
            )
        except GitError as e:
            self.logger.debug(e)
            raise

    async def tag(self, tag_name: str, ref: str, options: ExecOptions | None = None) -> None:
        """Create a lightweight tag on ``ref``."""
        await self.runner.run(["tag", tag_name, ref], options)
        self.logger.info(f"Created tag {tag_name} on {ref}", extra={"tag": tag_name})

    async def push(self, remote_url: str, options: ExecOptions | None = None) -> None:
        """Push all tags to the remote."""
        await self.runner.run(["push", "--tags", remote_url], options)
        self.logger.info("Pushed tags", extra={"remote": remote_url})

    # -- probes ----------------------------------------------------------------

    async def is_ref_exists(self, ref: str, options: ExecOptions | None = None) -> ProbeResult:
        """Check whether ``ref`` resolves to an object."""
        return await self._probe(["rev-parse", "--verify", ref], options)

    async def is_git_repo(self, options: ExecOptions | None = None) -> ProbeResult:
        """Check whether the working directory is inside a git repository."""
        return await self._probe(["rev-parse", "--git-dir"], options)

    async def verify_tag_name(self, tag_name: str, options: ExecOptions | None = None) -> ProbeResult:
        """Check that ``tag_name`` is a valid tag ref name."""
        return await self._probe(["check-ref-format", f"refs/tags/{tag_name}"], options)

    async def verify_branch_name(self, branch: str, options: ExecOptions | None = None) -> ProbeResult:
        """Check that ``branch`` is a valid branch ref name."""
        return await self._probe(["check-ref-format", f"refs/heads/{branch}"], options)

    async def repo_url(self, options: ExecOptions | None = None) -> str | None:
        """Get the configured ``origin`` URL, or None when unset."""
        options = options or ExecOptions()
        try:
            result = await self.runner.run(
                ["config", "--get", "remote.origin.url"], options.merge(reject=False)
            )
        except GitError as e:
            self.logger.debug(e)
            return None

        if not result.ok:
            self.logger.debug(f"No remote.origin.url ({result.exit_code})")
            return None
        return result.stdout or None
