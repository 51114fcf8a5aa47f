"""Thoughts CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.markup import escape

from thoughts import __version__
from thoughts.errors import ThoughtsError

if TYPE_CHECKING:
    from thoughts.config import ThoughtsConfig
    from thoughts.index_sync import SyncResult

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _console() -> Console:
    return Console(soft_wrap=True)


def _info(console: Console, msg: str) -> None:
    console.print(f"[green]\\[INFO][/green] {escape(msg)}")


def _warn(console: Console, msg: str) -> None:
    console.print(f"[yellow]\\[WARN][/yellow] {escape(msg)}")


def _fail(msg: str) -> NoReturn:
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _configure_logging(*, debug: bool) -> None:
    # Per-item warnings are rendered from SyncResult; outside debug mode the
    # log stream only carries errors so they are not printed twice.
    if not debug:
        logging.basicConfig(level=logging.ERROR, format=_LOG_FORMAT)
        return
    logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT, force=True)


def _load(ctx: click.Context, project: Path | None) -> ThoughtsConfig:
    """Resolve config for *project* (default: cwd) and set up logging."""
    from thoughts.config import load_config

    project_root = project or Path.cwd()
    try:
        config = load_config(project_root)
    except ThoughtsError as exc:
        _fail(str(exc))
    _configure_logging(debug=ctx.obj["verbose"] or config.debug)
    return config


_project_option = click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root containing thoughts/ (default: current directory).",
)


@click.group()
@click.version_option(version=__version__, prog_name="thoughts")
@click.option("--verbose", "-v", is_flag=True, help="Debug output.")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool) -> None:
    """Thoughts - manage the thoughts/ directory and its searchable index.

    \b
    Environment:
      THOUGHTS_USER   Username for the personal directory
      THOUGHTS_DEBUG  Set to 1 for debug output
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@_project_option
@click.pass_context
def init(ctx: click.Context, *, project: Path | None) -> None:
    """Initialize the thoughts/ directory structure."""
    from thoughts.scaffold import init_thoughts, render_layout

    config = _load(ctx, project)
    console = _console()

    if config.source_root.exists():
        _warn(
            console,
            f"{config.thoughts_dir}/ directory already exists. "
            "Re-initializing (existing files preserved)...",
        )
    _info(console, f"Creating {config.thoughts_dir}/ directory structure...")

    result = init_thoughts(config)

    _info(console, "Directory structure created:")
    for line in render_layout(config):
        click.echo(f"  {line}")
    for written in result.files_written:
        if written.name != ".gitkeep":
            _info(console, f"Created {written.relative_to(config.project_root)}")

    _info(console, f"✓ {config.thoughts_dir}/ initialized successfully!")
    click.echo("")
    _info(console, "Next steps:")
    click.echo(f"  1. Run `thoughts sync` to create/update {config.index_dir}/ hardlinks")
    click.echo(
        f"  2. Commit {config.thoughts_dir}/ to git "
        f"({config.index_dir}/ is gitignored)"
    )


def _render_sync(console: Console, config: ThoughtsConfig, result: SyncResult) -> None:
    click.echo("")
    _info(console, "✓ Sync complete!")
    click.echo(f"  Links added: {result.added}")
    click.echo(f"  Links removed: {result.removed}")
    click.echo(f"  Links skipped: {result.skipped}")
    click.echo(f"  Orphaned links cleaned: {result.orphaned}")
    if result.failed:
        click.echo(f"  Links failed: {len(result.failed)}")
    click.echo(
        f"  Total {config.suffix} files in {config.index_dir}/: {result.total}"
    )

    for warning in result.warnings:
        _warn(console, warning)
    for path in result.failed:
        _warn(console, f"Could not link {path}")

    if result.total == 0:
        _warn(
            console,
            f"No {config.suffix} files found. "
            f"Add some documents to {config.thoughts_dir}/ first.",
        )


@main.command()
@_project_option
@click.option("--json", "output_json", is_flag=True, help="Structured JSON output.")
@click.option("--strict", is_flag=True, help="Exit 1 if any document could not be linked.")
@click.pass_context
def sync(ctx: click.Context, *, project: Path | None, output_json: bool, strict: bool) -> None:
    """Synchronize hardlinks in the searchable index."""
    from thoughts.index_sync import sync_index

    config = _load(ctx, project)
    console = _console()

    if not output_json:
        _info(
            console,
            f"Synchronizing {config.thoughts_dir}/{config.index_dir}/ hardlinks...",
        )

    try:
        result = sync_index(config)
    except ThoughtsError as exc:
        _fail(str(exc))

    if output_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _render_sync(console, config, result)

    if strict and result.failed:
        sys.exit(1)


@main.command()
@_project_option
@click.option("--json", "output_json", is_flag=True, help="Structured JSON output.")
@click.pass_context
def metadata(ctx: click.Context, *, project: Path | None, output_json: bool) -> None:
    """Print git/project metadata for document frontmatter."""
    from thoughts.metadata import format_metadata, get_metadata

    config = _load(ctx, project)
    meta = get_metadata(config.project_root)

    if output_json:
        click.echo(json.dumps(meta.to_dict(), ensure_ascii=False, indent=2))
    else:
        click.echo(format_metadata(meta))
