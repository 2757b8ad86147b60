"""Shared utilities for releasegit CLI commands."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import click
from rich.console import Console

from releasegit.config import ReleaseGitConfig
from releasegit.exceptions import GitError
from releasegit.git import ReleaseGit

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def get_git(ctx: click.Context) -> ReleaseGit:
    """Return the ReleaseGit facade created by the root command."""
    return ctx.obj["git"]


def get_config(ctx: click.Context) -> ReleaseGitConfig:
    return ctx.obj["config"]


def run_git(coro: Coroutine[Any, Any, T]) -> T:
    """Run a git coroutine, turning GitError into exit status 1."""
    try:
        return asyncio.run(coro)
    except GitError as e:
        err_console.print(f"[red]Error:[/red] {e.message}")
        if e.command:
            err_console.print(f"[dim]{e.command}[/dim]")
        raise SystemExit(1) from e


async def resolve_remote(git: ReleaseGit, config: ReleaseGitConfig, remote_url: str | None) -> str:
    """Pick the remote URL: argument, then config, then ``remote.origin.url``."""
    url = remote_url or config.git.remote_url or await git.repo_url()
    if not url:
        raise click.UsageError("No remote URL given and none configured (remote.origin.url is unset)")
    return url
