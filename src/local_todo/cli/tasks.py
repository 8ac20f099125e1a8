"""Command-line interface for LocalTodo."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..config import ConfigError, ConfigModel, load_config
from ..storage import TodoStore, TodoStoreError


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Send package logs to stderr at the requested level."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("local_todo").setLevel(level)


def get_console(config: ConfigModel) -> Console:
    """Get a console honouring the colour preference."""
    return Console(no_color=not config.use_color, highlight=False)


def fail(action: str, error: Exception) -> None:
    """Report an operation failure and exit with status 1."""
    logger.debug("%s failed", action, exc_info=error)
    click.echo(f"Error {action}: {error}", err=True)
    sys.exit(1)


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--db", "db_path", type=click.Path(dir_okay=False), help="Path to the todo data file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config_path, db_path, verbose):
    """LocalTodo - a todo list kept in a local JSON file."""
    ctx.ensure_object(dict)

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if db_path:
        config.db_path = db_path

    configure_logging("DEBUG" if verbose else config.log_level)

    store = TodoStore(config.get_db_path(), json_indent=config.json_indent)
    try:
        ctx.obj["store"] = ctx.with_resource(store)
    except TodoStoreError as e:
        click.echo(f"Failed to open file: {e}", err=True)
        sys.exit(1)

    ctx.obj["config"] = config


@cli.command("createTodo")
@click.argument("title")
@click.pass_obj
def create_todo(obj, title):
    """Add a todo with the given TITLE."""
    try:
        todo = obj["store"].create(title)
    except TodoStoreError as e:
        fail("creating todo", e)

    logger.info("Created todo %d", todo.id)
    click.echo("Todo created successfully")


@cli.command("listTodos")
@click.option("--table", is_flag=True, help="Render todos as a table")
@click.pass_obj
def list_todos(obj, table):
    """List every todo."""
    try:
        todos = obj["store"].list()
    except TodoStoreError as e:
        fail("listing todos", e)

    if table:
        render = Table(title="Todos")
        render.add_column("ID", justify="right", style="dim")
        render.add_column("Title")
        render.add_column("Completed", justify="center")
        for todo in todos:
            render.add_row(
                str(todo.id),
                Text(todo.title),
                "[green]✓[/green]" if todo.completed else "",
            )
        get_console(obj["config"]).print(render)
        return

    click.echo("Todos:")
    for todo in todos:
        click.echo(todo.display())


@cli.command("updateTodos")
@click.argument("todo_id", metavar="ID")
@click.argument("title", required=False, default="")
@click.argument("completed", required=False, default="")
@click.pass_obj
def update_todos(obj, todo_id, title, completed):
    """Update the TITLE and/or COMPLETED flag of todo ID.

    Pass an empty string to leave a field unchanged, e.g.

      local-todo updateTodos 1 "" true
    """
    try:
        obj["store"].update(todo_id, title, completed)
    except TodoStoreError as e:
        fail("updating todo", e)


@cli.command("clearTodos")
@click.pass_obj
def clear_todos(obj):
    """Remove every todo."""
    try:
        obj["store"].clear()
    except TodoStoreError as e:
        fail("clearing todos", e)


main = cli
