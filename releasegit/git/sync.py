"""SyncController -- shallow-clone aware fetching of history, tags and notes.

CI systems usually check out a shallow, sometimes detached, copy of the
triggering commit. Before commit ranges or tag notes can be read the full
history has to be fetched, without moving the commit the CI job is
running on:

- On the trigger branch with a branch checked out, fetch without a
  refspec so the local branch is left where the CI put it.
- On any other branch, or on a detached HEAD, force-update the local
  branch ref from the remote so there is a real ref to compute from.

Each fetch first asks to unshallow and degrades to a plain fetch when
that fails (a full clone rejects ``--unshallow``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from releasegit.constants import HEAD_SENTINEL, NOTES_REFSPEC
from releasegit.exceptions import GitError
from releasegit.git.runner import CommandRunner
from releasegit.git.types import ExecOptions, FetchAttempt, FetchPlan, FinalFailure, ProbeResult
from releasegit.logging import get_logger

FETCH_SEQUENCE: tuple[FetchAttempt, ...] = (FetchAttempt.UNSHALLOW, FetchAttempt.PLAIN)


def notes_fetch_args(remote_url: str, attempt: FetchAttempt) -> list[str]:
    """Build the ``git fetch`` arguments for all notes refs."""
    args = ["fetch"]
    if attempt is FetchAttempt.UNSHALLOW:
        args.append("--unshallow")
    return [*args, remote_url, NOTES_REFSPEC]


class SyncController:
    """Fetches history, tags and notes from the remote."""

    def __init__(self, runner: CommandRunner, logger: logging.Logger | None = None) -> None:
        self.runner = runner
        self.logger = logger or get_logger("git.sync")

    async def is_detached_head(self, options: ExecOptions | None = None) -> ProbeResult:
        """Check whether HEAD points at a commit rather than a branch.

        Never raises. A failing query (not a repository, unborn HEAD) is
        INDETERMINATE, which the fetch plan treats as attached.
        """
        options = options or ExecOptions()
        try:
            result = await self.runner.run(
                ["rev-parse", "--abbrev-ref", HEAD_SENTINEL], options.merge(reject=False)
            )
        except GitError as e:
            self.logger.debug(f"Detached HEAD probe could not run: {e}")
            return ProbeResult.INDETERMINATE

        if not result.ok:
            self.logger.debug(f"Detached HEAD probe failed ({result.exit_code}): {result.stderr}")
            return ProbeResult.INDETERMINATE

        return ProbeResult.from_bool(result.stdout.strip() == HEAD_SENTINEL)

    async def plan(
        self,
        remote_url: str,
        branch: str,
        ci_branch: str | None,
        options: ExecOptions | None = None,
    ) -> FetchPlan:
        """Decide the refspec strategy for fetching ``branch``."""
        detached = await self.is_detached_head(options)
        return FetchPlan(
            remote_url=remote_url,
            branch=branch,
            on_trigger_branch=branch == ci_branch,
            detached=detached,
        )

    async def synchronize(
        self,
        remote_url: str,
        branch: str,
        ci_branch: str | None,
        options: ExecOptions | None = None,
    ) -> FetchPlan:
        """Fetch all tags and the full history of ``branch``.

        Args:
            remote_url: Remote repository URL
            branch: Release branch to fetch
            ci_branch: Branch that triggered the CI run
            options: Working directory and environment overrides

        Returns:
            The plan that was executed

        Raises:
            GitError: If both the unshallow and the plain fetch fail
        """
        plan = await self.plan(remote_url, branch, ci_branch, options)
        self.logger.debug(
            f"Fetching {branch} (trigger branch: {plan.on_trigger_branch}, "
            f"detached: {plan.detached}, refspec: {plan.refspec})",
            extra={"remote": remote_url, "branch": branch},
        )
        await self._degrading_fetch(
            [plan.fetch_args(attempt) for attempt in FETCH_SEQUENCE],
            FinalFailure.RAISE,
            options,
        )
        return plan

    async def synchronize_notes(self, remote_url: str, options: ExecOptions | None = None) -> bool:
        """Unshallow if necessary and fetch all notes refs.

        Notes are optional: a failure of the final attempt is logged and
        reported through the return value.

        Returns:
            True if one of the attempts succeeded
        """
        return await self._degrading_fetch(
            [notes_fetch_args(remote_url, attempt) for attempt in FETCH_SEQUENCE],
            FinalFailure.IGNORE,
            options,
        )

    async def _degrading_fetch(
        self,
        attempts: Sequence[list[str]],
        on_final_failure: FinalFailure,
        options: ExecOptions | None,
    ) -> bool:
        """Run each attempt in turn until one succeeds.

        Attempt N fails -> attempt N+1. The last failure is raised or
        ignored according to ``on_final_failure``. No delay, no further
        retries.
        """
        options = options or ExecOptions()
        last = len(attempts) - 1

        for index, args in enumerate(attempts):
            try:
                await self.runner.run(args, options.merge(reject=True))
                return True
            except GitError as e:
                if index < last:
                    self.logger.debug(
                        f"git {' '.join(args[:2])} failed, retrying without it: {e.stderr or e}",
                        extra={"attempt": index + 1},
                    )
                    continue
                if on_final_failure is FinalFailure.RAISE:
                    raise
                self.logger.debug(f"Ignoring fetch failure: {e}", extra={"attempt": index + 1})

        return False
