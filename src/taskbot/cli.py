"""Command-line interface for Taskbot."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.text import Text

from .app import Response, Taskbot
from .config import Config, ConfigModel, get_config
from .exceptions import StorageError
from .logging_setup import setup_logging
from .parser import suggest_keyword
from .storage import Storage


logger = logging.getLogger(__name__)


def get_console(config: ConfigModel) -> Console:
    return Console(no_color=config.no_color, highlight=False)


def open_session(config: ConfigModel, console: Console) -> Taskbot:
    """Load the task list, exiting with status 1 if the data file is unusable."""
    storage = Storage(config.get_data_path(), retries=config.save_retries)
    try:
        return Taskbot(storage)
    except StorageError as e:
        logger.critical(f"Cannot load tasks: {e}")
        console.print(Text(f"Error: cannot load tasks: {e}", style="bold red"))
        sys.exit(1)


def print_response(console: Console, line: str, response: Response) -> None:
    """Print a response; errors in red, with a keyword hint when one is close."""
    if not response.is_error:
        console.print(Text(response.text))
        return

    console.print(Text(response.text, style="red"))
    suggestion = suggest_keyword(line)
    if suggestion:
        console.print(Text(f"did you mean '{suggestion}'?", style="dim"))


@click.group(invoke_without_command=True)
@click.option("--config", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--file", "data_file", type=click.Path(dir_okay=False), help="Path to the task data file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config, data_file, verbose):
    """Taskbot - a to-do list with deadlines and events."""
    ctx.ensure_object(dict)

    cfg = Config.reload(Path(config)) if config else get_config()
    if data_file:
        cfg.data_file = str(Path(data_file).expanduser())

    console_level = logging.INFO if verbose else logging.getLevelName(cfg.log_level.upper())
    if not isinstance(console_level, int):
        console_level = logging.WARNING
    setup_logging(cfg.get_log_dir(), console_level=console_level)

    ctx.obj["config"] = cfg
    ctx.obj["console"] = get_console(cfg)

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
@click.pass_context
def shell(ctx):
    """Start an interactive session (the default)."""
    cfg: ConfigModel = ctx.obj["config"]
    console: Console = ctx.obj["console"]
    bot = open_session(cfg, console)

    console.print(Text(bot.ui.show_greeting(), style="bold cyan"))
    while True:
        try:
            line = console.input(cfg.prompt)
        except (EOFError, KeyboardInterrupt):
            console.print()
            console.print(Text(bot.ui.show_farewell(), style="bold cyan"))
            break

        if not line.strip():
            continue

        response = bot.get_response(line)
        print_response(console, line, response)
        if response.is_exit:
            break


@main.command()
@click.argument("words", nargs=-1, required=True)
@click.pass_context
def run(ctx, words):
    """Run a single command, e.g. taskbot run deadline report /by 2024-01-01 1800"""
    console: Console = ctx.obj["console"]
    bot = open_session(ctx.obj["config"], console)

    line = " ".join(words)
    response = bot.get_response(line)
    print_response(console, line, response)
    if response.is_error:
        sys.exit(1)


@main.command(name="list")
@click.option("--find", "keyword", help="Only show tasks containing this keyword")
@click.pass_context
def list_tasks(ctx, keyword: Optional[str]):
    """Show the saved tasks."""
    console: Console = ctx.obj["console"]
    bot = open_session(ctx.obj["config"], console)

    if keyword:
        console.print(Text(bot.ui.show_find_results(bot.tasks.find(keyword))))
    else:
        console.print(Text(bot.ui.show_list(bot.tasks)))


if __name__ == "__main__":
    main()
