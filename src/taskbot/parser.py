"""Command parser for Taskbot.

Turns raw input lines into ``Command`` objects. Validation is purely
syntactic: nothing here looks at the task list or the data file, so whether
a task number exists is decided when the command is executed.
"""

import logging
import re
from typing import Callable, Dict, Optional

from fuzzywuzzy import fuzz, process

from .commands import (
    AddCommand,
    Command,
    DeleteCommand,
    ExitCommand,
    FindCommand,
    InvalidCommand,
    ListCommand,
    MarkAsDoneCommand,
)
from .exceptions import DateTimeParseError
from .task import Deadline, Event, Todo
from .utils.datetime import parse_datetime


logger = logging.getLogger(__name__)

ERROR_MESSAGE_NO_SUCH_COMMAND = "sorry, I don't know what that means!"

ERROR_MESSAGE_EMPTY = "{} cannot be empty!"
ERROR_MESSAGE_EMPTY_DESCRIPTION = ERROR_MESSAGE_EMPTY.format("the description of a task")
ERROR_MESSAGE_EMPTY_SEARCH = ERROR_MESSAGE_EMPTY.format("the search keyword")
ERROR_MESSAGE_EMPTY_TASK_ID_DELETE = ERROR_MESSAGE_EMPTY.format("the task number to be deleted")
ERROR_MESSAGE_EMPTY_TASK_ID_DONE = ERROR_MESSAGE_EMPTY.format("the task number to be marked as done")

ERROR_MESSAGE_INVALID_FORMAT = "invalid format! please follow '{}'!"
ERROR_MESSAGE_INVALID_FORMAT_DEADLINE = ERROR_MESSAGE_INVALID_FORMAT.format(Deadline.COMMAND_FORMAT)
ERROR_MESSAGE_INVALID_FORMAT_EVENT = ERROR_MESSAGE_INVALID_FORMAT.format(Event.COMMAND_FORMAT)
ERROR_MESSAGE_INVALID_TASK_ID = "invalid task number!"
ERROR_MESSAGE_INVALID_DATE = "invalid date! please use 'yyyy-mm-dd HHmm' or a phrase like 'tomorrow 6pm'!"
ERROR_MESSAGE_MULTILINE_DESCRIPTION = "the description of a task cannot contain line breaks!"

# Greedy description: the split happens at the last separator
FORMAT_ARG_ADD_DEADLINE = re.compile(r"(?P<description>.*) /by (?P<by>.*)")
FORMAT_ARG_ADD_EVENT = re.compile(r"(?P<description>.*) /at (?P<at>.*)")
LINE_BREAK = re.compile(r"[\r\n]")


def try_add_deadline(args: str) -> Command:
    """Build an ``AddCommand`` for a deadline from ``<description> /by <date>``.

    Raises:
        DateTimeParseError: If the date part cannot be parsed.
    """
    if not args.strip():
        return InvalidCommand(ERROR_MESSAGE_EMPTY_DESCRIPTION)
    if LINE_BREAK.search(args):
        return InvalidCommand(ERROR_MESSAGE_MULTILINE_DESCRIPTION)

    match = FORMAT_ARG_ADD_DEADLINE.fullmatch(args)
    if not match:
        return InvalidCommand(ERROR_MESSAGE_INVALID_FORMAT_DEADLINE)

    description = match.group("description").strip()
    if not description:
        return InvalidCommand(ERROR_MESSAGE_EMPTY_DESCRIPTION)
    by = parse_datetime(match.group("by").strip())
    return AddCommand(Deadline(description, by))


def try_add_event(args: str) -> Command:
    """Build an ``AddCommand`` for an event from ``<description> /at <date>``.

    Raises:
        DateTimeParseError: If the date part cannot be parsed.
    """
    if not args.strip():
        return InvalidCommand(ERROR_MESSAGE_EMPTY_DESCRIPTION)
    if LINE_BREAK.search(args):
        return InvalidCommand(ERROR_MESSAGE_MULTILINE_DESCRIPTION)

    match = FORMAT_ARG_ADD_EVENT.fullmatch(args)
    if not match:
        return InvalidCommand(ERROR_MESSAGE_INVALID_FORMAT_EVENT)

    description = match.group("description").strip()
    if not description:
        return InvalidCommand(ERROR_MESSAGE_EMPTY_DESCRIPTION)
    at = parse_datetime(match.group("at").strip())
    return AddCommand(Event(description, at))


def try_add_todo(args: str) -> Command:
    if not args.strip():
        return InvalidCommand(ERROR_MESSAGE_EMPTY_DESCRIPTION)
    if LINE_BREAK.search(args):
        return InvalidCommand(ERROR_MESSAGE_MULTILINE_DESCRIPTION)
    return AddCommand(Todo(args))


def _parse_task_number(args: str) -> Optional[int]:
    try:
        return int(args.strip())
    except ValueError:
        return None


def try_delete(args: str) -> Command:
    if not args.strip():
        return InvalidCommand(ERROR_MESSAGE_EMPTY_TASK_ID_DELETE)

    index = _parse_task_number(args)
    if index is None:
        return InvalidCommand(ERROR_MESSAGE_INVALID_TASK_ID)
    return DeleteCommand(index)


def try_find(args: str) -> Command:
    if not args.strip():
        return InvalidCommand(ERROR_MESSAGE_EMPTY_SEARCH)
    return FindCommand(args)


def try_mark_as_done(args: str) -> Command:
    if not args.strip():
        return InvalidCommand(ERROR_MESSAGE_EMPTY_TASK_ID_DONE)

    index = _parse_task_number(args)
    if index is None:
        return InvalidCommand(ERROR_MESSAGE_INVALID_TASK_ID)
    return MarkAsDoneCommand(index)


COMMANDS: Dict[str, Callable[[str], Command]] = {
    "todo": try_add_todo,
    "deadline": try_add_deadline,
    "event": try_add_event,
    "delete": try_delete,
    "done": try_mark_as_done,
    "find": try_find,
    "list": lambda args: ListCommand(),
    "bye": lambda args: ExitCommand(),
}


def parse_command(line: str) -> Command:
    """Parse a full input line such as ``deadline report /by 2024-01-01 1800``.

    The first word selects the command (case-insensitive); the rest of the
    line is handed to the matching ``try_*`` function. Date errors become an
    ``InvalidCommand`` here so that bad input never escapes as an exception.
    """
    keyword, _, args = line.lstrip().partition(" ")
    handler = COMMANDS.get(keyword.rstrip().lower())
    if handler is None:
        logger.debug(f"Unknown command keyword: {keyword!r}")
        return InvalidCommand(ERROR_MESSAGE_NO_SUCH_COMMAND)

    try:
        return handler(args)
    except DateTimeParseError as e:
        logger.debug(f"Rejected date in {keyword!r} command: {e}")
        return InvalidCommand(ERROR_MESSAGE_INVALID_DATE)


def suggest_keyword(line: str, score_cutoff: int = 70) -> Optional[str]:
    """Suggest the closest known keyword for a mistyped command, if any."""
    keyword = line.strip().partition(" ")[0].lower()
    if not keyword or keyword in COMMANDS:
        return None
    best = process.extractOne(keyword, list(COMMANDS), scorer=fuzz.ratio, score_cutoff=score_cutoff)
    return best[0] if best else None
