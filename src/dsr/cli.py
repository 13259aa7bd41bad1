"""Command-line interface for the key-value store."""

import logging
from contextlib import contextmanager
from typing import Iterator

import click

from .config import Config, resolve_config
from .exceptions import DsrError
from .log_formatter import setup_logging
from .store import RecordStore, open_configured_store

LOG = logging.getLogger("dsr")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _utf8_text(ctx: click.Context, param: click.Parameter, value: str) -> str:
    """Reject arguments that cannot be stored as UTF-8 text."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise click.BadParameter("not valid UTF-8 text.", ctx=ctx, param=param) from e
    return value


@contextmanager
def _open_store(config: Config) -> Iterator[RecordStore]:
    """Open the configured store, reporting dsr errors as click errors."""
    try:
        with open_configured_store(config) as store:
            yield store
    except DsrError as e:
        raise click.ClickException(str(e)) from e


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(None, "-V", "--version", package_name="dsr", prog_name="dsr")
@click.option(
    "--ds",
    type=str,
    default=None,
    metavar="PATH",
    help="Datastore location (default: dsr/ds.db in the user config directory).",
)
@click.option(
    "--level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for diagnostics written to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, ds: str | None, level: str) -> None:
    """Key-value store on top of a single SQLite table.

    Each command opens the datastore, performs one operation and exits.
    """
    setup_logging(LOG, log_level=level.upper())
    ctx.obj = resolve_config(ds)


@cli.command("set")
@click.argument("key", callback=_utf8_text)
@click.argument("value", callback=_utf8_text)
@click.pass_obj
def set_(config: Config, key: str, value: str) -> None:
    """Set the value of a record."""
    with _open_store(config) as store:
        store.set(key, value)
    click.echo("ok")


@cli.command()
@click.argument("key", callback=_utf8_text)
@click.pass_obj
def get(config: Config, key: str) -> None:
    """Get the value of a record."""
    with _open_store(config) as store:
        value = store.get(key)
    click.echo(value)


@cli.command()
@click.argument("key", callback=_utf8_text)
@click.pass_obj
def contains(config: Config, key: str) -> None:
    """Check if a record exists."""
    with _open_store(config) as store:
        found = store.contains(key)
    click.echo("true" if found else "false")


@cli.command()
@click.argument("key", callback=_utf8_text)
@click.pass_obj
def delete(config: Config, key: str) -> None:
    """Delete a record.

    Deleting a key that is not in the datastore is an error, as with get.
    """
    with _open_store(config) as store:
        store.delete(key)
    click.echo("ok")


@cli.command()
@click.pass_obj
def keys(config: Config) -> None:
    """List all keys in the datastore."""
    with _open_store(config) as store:
        for key in store.keys():
            click.echo(key)


@cli.command()
@click.pass_obj
def values(config: Config) -> None:
    """List all values in the datastore."""
    with _open_store(config) as store:
        for value in store.values():
            click.echo(value)


@cli.command()
@click.pass_obj
def records(config: Config) -> None:
    """List all records in the datastore as key,value lines."""
    with _open_store(config) as store:
        for key, value in store.records():
            click.echo(f"{key},{value}")


@cli.command("help")
@click.argument("subcommand", required=False)
@click.pass_context
def help_(ctx: click.Context, subcommand: str | None) -> None:
    """Show help for dsr or one of its commands.

    Examples:

        dsr help

        dsr help set
    """
    group_ctx = ctx.parent
    if subcommand is None:
        click.echo(group_ctx.get_help())
        return

    command = cli.get_command(group_ctx, subcommand)
    if command is None:
        raise click.UsageError(f"No such command '{subcommand}'.", ctx)

    sub_ctx = click.Context(command, info_name=subcommand, parent=group_ctx)
    click.echo(command.get_help(sub_ctx))
