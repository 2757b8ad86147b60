"""releasegit command-line interface."""

from pathlib import Path

import click

from releasegit import __version__
from releasegit.commands import add_note, commits, status, sync, tags_notes
from releasegit.config import ReleaseGitConfig
from releasegit.exceptions import ConfigurationError
from releasegit.git import ReleaseGit
from releasegit.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="releasegit")
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository working directory (default: current directory)",
)
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Config file path")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"]),
    default=None,
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, cwd: Path | None, config_path: Path | None, log_level: str | None) -> None:
    """releasegit - git facade for release automation.

    Fetches history and release notes on shallow CI checkouts, lists
    commit ranges, and reads or writes tag release notes.
    """
    ctx.ensure_object(dict)

    if config_path is None and cwd is not None:
        config_path = cwd / ".releasegit.yaml"
    try:
        config = ReleaseGitConfig.load(config_path)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    setup_logging(
        level=log_level or config.logging.level,
        log_dir=config.logging.directory,
        json_output=config.logging.json_output,
    )

    ctx.obj["config"] = config
    ctx.obj.setdefault("git", ReleaseGit(cwd=cwd, settings=config.git))


cli.add_command(sync)
cli.add_command(commits)
cli.add_command(status)
cli.add_command(tags_notes)
cli.add_command(add_note)


if __name__ == "__main__":
    cli()
