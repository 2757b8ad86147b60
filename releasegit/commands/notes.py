"""releasegit notes commands - read and write tag release notes."""

import json

import click
from rich.table import Table

from releasegit.commands._utils import console, get_config, get_git, resolve_remote, run_git
from releasegit.git import ReleaseGit, thaw


@click.command("tags-notes")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.pass_context
def tags_notes(ctx: click.Context, as_json: bool) -> None:
    """Show the release note attached to each tag."""
    notes = run_git(get_git(ctx).get_tags_notes())

    if as_json:
        click.echo(json.dumps({tag: thaw(note) for tag, note in notes.items()}, indent=2))
        return

    if not notes:
        console.print("[yellow]No tag notes found[/yellow]")
        return

    table = Table(title="Tag notes")
    table.add_column("Tag", style="cyan")
    table.add_column("Note")
    for tag in sorted(notes):
        table.add_row(tag, json.dumps(thaw(notes[tag])))
    console.print(table)


async def _add_note(git: ReleaseGit, note: object, ref: str, remote_url: str | None) -> None:
    await git.add_note(note, ref)
    if remote_url:
        await git.push_notes(remote_url, ref)


@click.command("add-note")
@click.argument("ref")
@click.argument("note_json")
@click.option("--push", "push_remote", default=None, help="Push the notes ref to this remote URL")
@click.option("--push-origin", is_flag=True, help="Push the notes ref to the configured remote")
@click.pass_context
def add_note(ctx: click.Context, ref: str, note_json: str, push_remote: str | None, push_origin: bool) -> None:
    """Attach NOTE_JSON as the release note of REF."""
    try:
        note = json.loads(note_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="NOTE_JSON") from e

    git = get_git(ctx)
    remote_url = push_remote
    if push_origin and not remote_url:
        remote_url = run_git(resolve_remote(git, get_config(ctx), None))

    run_git(_add_note(git, note, ref, remote_url))
    console.print(f"[green]✓[/green] Added note to {ref}")
    if remote_url:
        console.print(f"[green]✓[/green] Pushed notes to {remote_url}")
