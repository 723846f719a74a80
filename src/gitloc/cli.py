"""gitloc CLI — presentation layer.

Thin adapter: all resolution logic lives in ``gitloc.core``.  The CLI only
turns user paths into absolute ones, calls the resolver, and formats the
answer (or the merge-tool command built from it).
"""

from __future__ import annotations

import json
import os
import shlex
from pathlib import Path

import structlog
import typer
from pydantic import ValidationError
from rich import print
from rich.markup import escape
from rich.table import Table

from gitloc import invocation
from gitloc.core.errors import InvalidLineRange
from gitloc.core.logging import configure_logging
from gitloc.core.models import ElementKind, RelativeLocation
from gitloc.core.relpath import relative_location
from gitloc.core.resolver import find_repository, resolve_file_location
from gitloc.core.settings import Settings

logger = structlog.get_logger()

app = typer.Typer(help="gitloc — find the (submodule-aware) repository root for any path.")


# ── Callback (runs before every command) ────────────────────
@app.callback(invoke_without_command=True)
def _main_callback(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level", envvar="GITLOC_LOG_LEVEL", help="Log level."),
    log_json: bool = typer.Option(True, "--log-json/--log-text", envvar="GITLOC_LOG_JSON", help="JSON or human logs."),
) -> None:
    """Configure logging + settings, then store in context for sub-commands."""
    configure_logging(level=log_level, json_output=log_json)
    try:
        settings = Settings(log_level=log_level, log_json=log_json)
    except ValidationError as exc:
        print(f"[red]ERROR:[/red] invalid configuration: {escape(str(exc))}")
        raise typer.Exit(code=2)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings

    # If no sub-command given, show help.
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj["settings"]


def _absolute(path: Path) -> Path:
    return Path(os.path.normpath(path.absolute()))


def _kind_of(path: Path) -> ElementKind:
    return ElementKind.DIRECTORY if path.is_dir() else ElementKind.FILE


def _locate(ctx: typer.Context, file: Path) -> RelativeLocation:
    """Resolve *file* or exit with code 1."""
    target = _absolute(file)
    location = resolve_file_location(target, settings=_settings(ctx))
    if location is None:
        print(f"[yellow]Unable to resolve the repository for[/yellow] {escape(str(target))}")
        raise typer.Exit(code=1)
    return location


def _show(inv: invocation.Invocation) -> None:
    typer.echo(f"cwd     : {inv.cwd}")
    typer.echo(f"command : {shlex.join(inv.command)}")
    logger.info("invocation_built", cwd=inv.cwd, args=list(inv.args))


# ── Commands ────────────────────────────────────────────────
@app.command()
def root(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="File or directory (default: current directory)."),
) -> None:
    """Print the working-tree root that owns PATH."""
    target = _absolute(path)
    repo = find_repository(target, _kind_of(target), settings=_settings(ctx))
    if repo is None:
        print(f"[yellow]Unable to resolve the repository for[/yellow] {escape(str(target))}")
        raise typer.Exit(code=1)
    typer.echo(str(repo.working_tree_root))


@app.command()
def locate(
    ctx: typer.Context,
    file: Path = typer.Argument(help="File to locate."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """Show the root that owns FILE and FILE's path relative to it."""
    target = _absolute(file)
    repo = find_repository(target, ElementKind.FILE, settings=_settings(ctx))
    if repo is None:
        print(f"[yellow]Unable to resolve the repository for[/yellow] {escape(str(target))}")
        raise typer.Exit(code=1)
    location = relative_location(target, repo.working_tree_root)

    if as_json:
        payload = {
            "root": str(location.root),
            "relative_path": location.relative_path,
            "metadata_dir": str(repo.metadata_dir),
            "submodule": repo.is_submodule,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Location", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Root", escape(str(location.root)))
    table.add_row("Relative path", escape(location.relative_path))
    table.add_row("Metadata", escape(str(repo.metadata_dir)))
    table.add_row("Kind", "[cyan]submodule[/cyan]" if repo.is_submodule else "repository")
    print(table)


@app.command(name="open")
def open_cmd(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="File or directory inside the repository."),
) -> None:
    """Print the merge-tool command that opens the owning repository."""
    s = _settings(ctx)
    target = _absolute(path)
    repo = find_repository(target, _kind_of(target), settings=s)
    if repo is None:
        print("[yellow]Unable to resolve the repository to open.[/yellow]")
        raise typer.Exit(code=1)
    assert s.merge_binary is not None  # guaranteed by model_validator
    _show(invocation.open_repository(s.merge_binary, repo.working_tree_root))


@app.command()
def history(
    ctx: typer.Context,
    file: Path = typer.Argument(help="File whose history to show."),
) -> None:
    """Print the merge-tool command that shows FILE's history."""
    s = _settings(ctx)
    assert s.merge_binary is not None
    _show(invocation.file_history(s.merge_binary, _locate(ctx, file)))


@app.command()
def blame(
    ctx: typer.Context,
    file: Path = typer.Argument(help="File to blame."),
) -> None:
    """Print the merge-tool command that blames FILE."""
    s = _settings(ctx)
    assert s.merge_binary is not None
    _show(invocation.blame_file(s.merge_binary, _locate(ctx, file)))


@app.command(name="line-history")
def line_history(
    ctx: typer.Context,
    file: Path = typer.Argument(help="File containing the lines."),
    start: int = typer.Option(..., "--start", "-s", help="First line (1-based)."),
    end: int | None = typer.Option(None, "--end", "-e", help="Last line (default: --start)."),
) -> None:
    """Print the merge-tool command that shows the history of a line range."""
    s = _settings(ctx)
    assert s.merge_binary is not None
    location = _locate(ctx, file)
    try:
        inv = invocation.line_history(s.merge_binary, location, start, start if end is None else end)
    except InvalidLineRange as exc:
        print(f"[red]ERROR:[/red] {exc}")
        raise typer.Exit(code=1)
    _show(inv)


# ── Entrypoint ──────────────────────────────────────────────
def main() -> None:  # noqa: D103
    app()
