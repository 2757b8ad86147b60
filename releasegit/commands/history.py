"""releasegit history commands - commit ranges and repository status."""

import asyncio
import json

import click
from rich.table import Table

from releasegit.commands._utils import console, get_git, run_git
from releasegit.git import ReleaseGit


@click.command("commits")
@click.argument("to_sha", default="HEAD")
@click.option("--from", "from_sha", default=None, help="Exclusive lower bound (e.g. last release)")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def commits(ctx: click.Context, to_sha: str, from_sha: str | None, as_json: bool) -> None:
    """List the commits in FROM..TO_SHA (or all ancestors of TO_SHA)."""
    records = run_git(get_git(ctx).get_commits(from_sha, to_sha))

    if as_json:
        payload = [
            {
                "sha": record.sha,
                "message": record.message,
                "tags": record.tags,
                "committer_date": record.committer_date.isoformat(),
                "author_name": record.author_name,
                "author_email": record.author_email,
            }
            for record in records
        ]
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"{len(records)} commits")
    table.add_column("SHA", style="cyan")
    table.add_column("Date")
    table.add_column("Tags", style="green")
    table.add_column("Subject")
    for record in records:
        table.add_row(
            record.sha[:8],
            record.committer_date.strftime("%Y-%m-%d"),
            record.tags,
            record.message.split("\n", 1)[0],
        )
    console.print(table)


async def _status(git: ReleaseGit) -> dict[str, object]:
    is_repo = await git.is_git_repo()
    if not is_repo:
        return {"repository": False}
    remote, detached = await asyncio.gather(git.repo_url(), git.is_detached_head())
    return {
        "repository": True,
        "remote": remote,
        "head": await git.get_git_head(),
        "detached": str(detached),
    }


@click.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show repository, remote and HEAD state."""
    info = run_git(_status(get_git(ctx)))
    if not info["repository"]:
        console.print("[red]Not a git repository[/red]")
        raise SystemExit(1)

    console.print(f"Remote:   {info['remote'] or '[dim]none[/dim]'}")
    console.print(f"HEAD:     {info['head']}")
    console.print(f"Detached: {info['detached']}")
