"""releasegit sync command - fetch history, tags and notes."""

import click

from releasegit.commands._utils import console, get_config, get_git, resolve_remote, run_git
from releasegit.git import ReleaseGit
from releasegit.git.types import FetchPlan


async def _sync(git: ReleaseGit, remote_url: str, branch: str, ci_branch: str | None, notes: bool) -> tuple[FetchPlan, bool | None]:
    plan = await git.synchronize(remote_url, branch, ci_branch)
    notes_ok = await git.synchronize_notes(remote_url) if notes else None
    return plan, notes_ok


@click.command("sync")
@click.argument("branch")
@click.option("--remote", "remote_url", default=None, help="Remote URL (default: config, then origin)")
@click.option("--ci-branch", default=None, help="Branch that triggered the CI run")
@click.option("--notes/--no-notes", default=True, help="Also fetch release notes refs")
@click.pass_context
def sync(ctx: click.Context, branch: str, remote_url: str | None, ci_branch: str | None, notes: bool) -> None:
    """Fetch the full history of BRANCH, all tags, and notes.

    Leaves the checkout untouched when BRANCH is the CI trigger branch and
    HEAD is attached; otherwise force-updates the local BRANCH ref.
    """
    git = get_git(ctx)
    url = run_git(resolve_remote(git, get_config(ctx), remote_url))
    plan, notes_ok = run_git(_sync(git, url, branch, ci_branch, notes))

    if plan.refspec:
        console.print(f"[green]✓[/green] Fetched {plan.refspec}")
    else:
        console.print(f"[green]✓[/green] Fetched tags for {branch} (checkout preserved)")
    if notes_ok is False:
        console.print("[yellow]Notes could not be fetched[/yellow]")
    elif notes_ok:
        console.print("[green]✓[/green] Fetched notes")
