"""Executable commands produced by the command parser.

Each command is a small dataclass; ``execute`` applies it to the task list,
persists the list when it changed, and returns the response text.
"""

import logging
from dataclasses import dataclass
from typing import ClassVar, TYPE_CHECKING

from .exceptions import TaskIndexError
from .task import Task, TaskList
from .ui import Ui

if TYPE_CHECKING:
    from .storage import Storage


logger = logging.getLogger(__name__)


class Command:
    """Base class for all commands."""

    is_exit: ClassVar[bool] = False

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        raise NotImplementedError


def _save(storage: "Storage", tasks: TaskList, ui: Ui, response: str) -> str:
    """Persist the list and append a warning if it could not be written."""
    if storage.save(tasks):
        return response
    return f"{response}\n{ui.show_save_warning()}"


@dataclass
class AddCommand(Command):
    """Append a task to the list."""

    task: Task

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        tasks.add(self.task)
        logger.debug(f"Added task: {self.task}")
        return _save(storage, tasks, ui, ui.show_add_response(self.task, tasks.size()))


@dataclass
class DeleteCommand(Command):
    """Remove the task with the given 1-based number."""

    index: int

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        try:
            task = tasks.remove(self.index)
        except TaskIndexError as e:
            logger.debug(str(e))
            return ui.show_no_such_task(self.index)
        return _save(storage, tasks, ui, ui.show_delete_response(task, tasks.size()))


@dataclass
class MarkAsDoneCommand(Command):
    """Mark the task with the given 1-based number as done."""

    index: int

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        try:
            task = tasks.mark_as_done(self.index)
        except TaskIndexError as e:
            logger.debug(str(e))
            return ui.show_no_such_task(self.index)
        return _save(storage, tasks, ui, ui.show_done_response(task))


@dataclass
class FindCommand(Command):
    keyword: str

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        return ui.show_find_results(tasks.find(self.keyword))


@dataclass
class ListCommand(Command):
    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        return ui.show_list(tasks)


@dataclass
class ExitCommand(Command):
    is_exit: ClassVar[bool] = True

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        return ui.show_farewell()


@dataclass
class InvalidCommand(Command):
    """Rejected input; executing it just returns the message."""

    message: str

    def execute(self, storage: "Storage", tasks: TaskList, ui: Ui) -> str:
        return self.message
