"""todo CLI: personal task list backed by a plain text file.

Commands:
    todo init [--yes]          create (or wipe and re-create) the database
    todo list                  print all records as "N. text"
    todo add TEXT              append a record
    todo remove INDEX          delete the record at INDEX
    todo search PATTERN        print records containing PATTERN
    todo clean                 delete the database file
    todo config [--init]       show resolved paths / write config.toml
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import click

from todo.config import TodoConfig, init_config, load_config
from todo.models import Record
from todo.store import NotInitializedError, RecordStore

_LOG_FORMAT = "%(asctime)s %(name)s %(message)s"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclass
class _State:
    cfg: TodoConfig
    store: RecordStore


def _load_cfg() -> TodoConfig:
    try:
        return load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_record(record: Record) -> None:
    # Bytes the store could not decode go back out unchanged
    click.echo(os.fsencode(record.format()))


def _not_initialized(exc: NotInitializedError) -> NoReturn:
    click.echo(str(exc))
    raise SystemExit(1) from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.version_option(package_name="todo")
@click.option(
    "--db", "db", default=None, type=click.Path(dir_okay=False, path_type=Path),
    help="Database file (overrides config)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx: click.Context, db: Path | None, verbose: bool) -> None:
    """Minimal task list stored in a text file."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    cfg = _load_cfg()
    level = logging.DEBUG if verbose else logging.getLevelNamesMapping().get(cfg.log_level)
    if level is None:
        raise click.ClickException(f"Invalid log level: {cfg.log_level}")
    logging.basicConfig(level=level, format=_LOG_FORMAT)

    if db is not None:
        cfg.db_path = db
    else:
        cfg.ensure_dirs()
    ctx.obj = _State(cfg=cfg, store=RecordStore(cfg.db_path))


# ---------------------------------------------------------------------------
# todo init / todo clean
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--yes", "-y", is_flag=True, help="Re-initialize without asking")
@click.pass_obj
def init(state: _State, yes: bool) -> None:
    """Initialize the database (asks before wiping an existing one)."""
    outcome = state.store.initialize(
        confirm=lambda: yes or click.confirm(
            "Database already exists, re-initializing the database will delete everything."
            " Do you want to continue?",
            default=True,
        ),
    )
    if outcome is not None:
        click.echo(f"Database {outcome}!")


@cli.command()
@click.pass_obj
def clean(state: _State) -> None:
    """Wipe the entire database. Needs `todo init` afterwards."""
    try:
        state.store.wipe()
    except NotInitializedError as exc:
        _not_initialized(exc)
    click.echo("Database cleaned!")


# ---------------------------------------------------------------------------
# todo list / todo search
# ---------------------------------------------------------------------------


@cli.command("list")
@click.pass_obj
def list_(state: _State) -> None:
    """List all the items in the database."""
    try:
        records = state.store.list_records()
    except NotInitializedError as exc:
        _not_initialized(exc)
    for record in records:
        _echo_record(record)


@cli.command()
@click.argument("pattern")
@click.pass_obj
def search(state: _State, pattern: str) -> None:
    """Print items containing PATTERN (case-sensitive, no regex)."""
    try:
        matches = state.store.search(pattern)
    except NotInitializedError as exc:
        _not_initialized(exc)
    for record in matches:
        _echo_record(record)


# ---------------------------------------------------------------------------
# todo add / todo remove
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("text")
@click.pass_obj
def add(state: _State, text: str) -> None:
    """Add an item to the end of the database."""
    try:
        state.store.append(text)
    except NotInitializedError as exc:
        _not_initialized(exc)


@cli.command()
@click.argument("index", type=int)
@click.pass_obj
def remove(state: _State, index: int) -> None:
    """Remove the item at INDEX (as shown by `todo list`).

    \b
    Later items shift down by one. An INDEX past the end is a no-op.
    """
    try:
        state.store.delete_at(index)
    except NotInitializedError as exc:
        _not_initialized(exc)


# ---------------------------------------------------------------------------
# todo config
# ---------------------------------------------------------------------------


@cli.command("config")
@click.option("--init", "write", is_flag=True, help="Write a default config.toml")
@click.pass_obj
def config_(state: _State, write: bool) -> None:
    """Show resolved config paths."""
    if write:
        try:
            path = init_config(state.cfg.config_dir)
            click.echo(f"Created {path}")
        except FileExistsError:
            click.echo("config.toml already exists, skipping")
    click.echo(f"Config dir : {state.cfg.config_dir}")
    click.echo(f"Config file: {state.cfg.config_path}")
    click.echo(f"Database   : {state.cfg.db_path}")


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------

cli.add_command(list_, name="ls")
cli.add_command(remove, name="rm")

# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
