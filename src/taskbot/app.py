"""Taskbot session: ties parser, task list, storage and responses together."""

import logging
from dataclasses import dataclass
from typing import Optional

from .commands import InvalidCommand
from .parser import parse_command
from .storage import Storage
from .task import TaskList
from .ui import Ui


logger = logging.getLogger(__name__)


@dataclass
class Response:
    """Result of handling one input line."""
    text: str
    is_exit: bool = False
    is_error: bool = False


class Taskbot:
    """One running session over a single data file.

    Tasks are loaded once at construction; every mutating command saves the
    whole list before its response is returned.

    Raises:
        StorageError: From the constructor if the data file cannot be loaded.
    """

    def __init__(self, storage: Storage, ui: Optional[Ui] = None):
        self.storage = storage
        self.ui = ui or Ui()
        self.tasks = TaskList(storage.load())
        logger.info(f"Session started with {len(self.tasks)} tasks from {storage.path}")

    def get_response(self, line: str) -> Response:
        command = parse_command(line)
        logger.debug(f"Parsed {line!r} as {command!r}")
        return Response(
            text=command.execute(self.storage, self.tasks, self.ui),
            is_exit=command.is_exit,
            is_error=isinstance(command, InvalidCommand),
        )
