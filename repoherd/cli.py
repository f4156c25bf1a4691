"""CLI commands for repoherd."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from repoherd.exceptions import RepoHerdError
from repoherd.getter import Getter
from repoherd.models.config import HerdConfig
from repoherd.models.options import GetAction, GetOptions
from repoherd.vcs.base import VCSKind

console = Console()
err_console = Console(stderr=True)

ACTION_STYLES = {
    GetAction.CLONED: "green",
    GetAction.UPDATED: "blue",
    GetAction.SKIPPED: "dim",
}


def get_config(config_path: str | None, roots: tuple[str, ...]) -> HerdConfig:
    config = HerdConfig.load(Path(config_path) if config_path else None)
    if roots:
        config = config.model_copy(update={"roots": [Path(r).expanduser().absolute() for r in roots]})
    return config


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.option("--root", "roots", multiple=True, help="Local root (can repeat; overrides config)")
@click.option("--config", "config_path", default=None, help="Config file")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, roots: tuple[str, ...], config_path: str | None, verbose: bool) -> None:
    """repoherd - clone and update repositories into one tree."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = get_config(config_path, roots)


@main.command()
@click.argument("references", nargs=-1, required=True)
@click.option("--update", "-u", is_flag=True, help="Update working copies that already exist")
@click.option("--shallow", is_flag=True, help="Fetch as little history as the VCS allows")
@click.option("--branch", "-b", default="", help="Branch or tag to clone")
@click.option("--private", "-p", is_flag=True, help="Clone over SSH (ssh://git@host/...)")
@click.option("--silent", "-s", is_flag=True, help="Hide VCS tool output")
@click.option("--vcs", type=click.Choice([k.value for k in VCSKind]), default=None,
              help="Backend for new clones")
@click.option("--parallel", "-P", is_flag=True, help="Get distinct repositories concurrently")
@click.pass_context
def get(
    ctx: click.Context,
    references: tuple[str, ...],
    update: bool,
    shallow: bool,
    branch: str,
    private: bool,
    silent: bool,
    vcs: str | None,
    parallel: bool,
) -> None:
    """Clone repositories, or update them with -u."""
    getter = Getter(ctx.obj["config"])
    options = GetOptions(
        update=update,
        shallow=shallow,
        branch=branch,
        private=private,
        silent=silent,
        vcs=VCSKind(vcs) if vcs else None,
    )

    results = asyncio.run(getter.get_many(list(references), options, parallel=parallel))

    table = Table(title="Get Results")
    table.add_column("Reference", style="cyan")
    table.add_column("Action", justify="center")
    table.add_column("VCS", style="yellow")
    table.add_column("Path", style="dim")

    failed = 0
    for reference, result in zip(references, results):
        if isinstance(result, RepoHerdError):
            failed += 1
            table.add_row(reference, "[red]failed[/red]", "-", "-")
            err_console.print(f"[red]{result}[/red]")
            continue
        style = ACTION_STYLES[result.action]
        table.add_row(
            reference,
            f"[{style}]{result.action.value}[/{style}]",
            result.vcs.value,
            str(result.local_dir),
        )

    console.print(table)
    if failed:
        ctx.exit(1)


@main.command()
@click.option("--all", "show_all", is_flag=True, help="Print every root")
@click.pass_context
def root(ctx: click.Context, show_all: bool) -> None:
    """Print the local root directory."""
    config: HerdConfig = ctx.obj["config"]
    for path in config.roots if show_all else config.roots[:1]:
        click.echo(str(path))


@main.command("list")
@click.argument("query", required=False)
@click.option("--full-path", "-p", is_flag=True, help="Print absolute paths")
@click.pass_context
def list_repos(ctx: click.Context, query: str | None, full_path: bool) -> None:
    """List working copies under the roots."""
    getter = Getter(ctx.obj["config"])
    try:
        repositories = list(getter.mapper.walk())
    except RepoHerdError as e:
        raise click.ClickException(str(e)) from e

    for repository in repositories:
        relative = repository.relative_path
        if query and query not in relative:
            continue
        click.echo(str(repository.path) if full_path else relative)


if __name__ == "__main__":
    main()
