"""Task data model for the Taskbot application."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Iterable, Iterator, List, Optional, Tuple

from .exceptions import TaskIndexError
from .utils.datetime import format_datetime


class TaskStatus(Enum):
    """Completion state of a task."""
    NOT_DONE = "not_done"
    DONE = "done"

    @property
    def icon(self) -> str:
        return "✓" if self is TaskStatus.DONE else " "


@dataclass
class Task:
    """Base task: a description and a completion status.

    Subclasses set ``TYPE_CODE``, the single character written to the data
    file, and ``COMMAND_FORMAT``, the usage template shown on bad input.
    """

    TYPE_CODE: ClassVar[str] = ""
    COMMAND_FORMAT: ClassVar[str] = ""

    description: str
    status: TaskStatus = TaskStatus.NOT_DONE

    @property
    def is_done(self) -> bool:
        return self.status is TaskStatus.DONE

    def mark_as_done(self) -> None:
        """Mark the task as done. Marking a done task again is a no-op."""
        self.status = TaskStatus.DONE

    @property
    def when(self) -> Optional[datetime]:
        """The date-time attached to the task, if any."""
        return None

    def matches(self, keyword: str) -> bool:
        return keyword.lower() in self.description.lower()

    def __str__(self) -> str:
        return f"[{self.TYPE_CODE}][{self.status.icon}] {self.description}"


@dataclass
class Todo(Task):
    """A task without a date."""

    TYPE_CODE: ClassVar[str] = "T"
    COMMAND_FORMAT: ClassVar[str] = "todo <description>"


@dataclass(init=False)
class Deadline(Task):
    """A task that must be done by a given date-time."""

    TYPE_CODE: ClassVar[str] = "D"
    COMMAND_FORMAT: ClassVar[str] = "deadline <description> /by <date>"

    by: datetime

    def __init__(self, description: str, by: datetime, status: TaskStatus = TaskStatus.NOT_DONE):
        super().__init__(description, status)
        self.by = by

    @property
    def when(self) -> Optional[datetime]:
        return self.by

    def __str__(self) -> str:
        return f"{super().__str__()} (by: {format_datetime(self.by)})"


@dataclass(init=False)
class Event(Task):
    """A task that happens at a given date-time."""

    TYPE_CODE: ClassVar[str] = "E"
    COMMAND_FORMAT: ClassVar[str] = "event <description> /at <date>"

    at: datetime

    def __init__(self, description: str, at: datetime, status: TaskStatus = TaskStatus.NOT_DONE):
        super().__init__(description, status)
        self.at = at

    @property
    def when(self) -> Optional[datetime]:
        return self.at

    def __str__(self) -> str:
        return f"{super().__str__()} (at: {format_datetime(self.at)})"


class TaskList:
    """Ordered list of tasks, addressed by 1-based task numbers."""

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks else []

    def _check(self, index: int) -> int:
        if not 1 <= index <= len(self._tasks):
            raise TaskIndexError(index, len(self._tasks))
        return index - 1

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, index: int) -> Task:
        return self._tasks[self._check(index)]

    def remove(self, index: int) -> Task:
        """Remove and return the task with the given number."""
        return self._tasks.pop(self._check(index))

    def mark_as_done(self, index: int) -> Task:
        task = self.get(index)
        task.mark_as_done()
        return task

    def find(self, keyword: str) -> List[Tuple[int, Task]]:
        """Return ``(task number, task)`` pairs whose description contains the keyword."""
        return [(i, task) for i, task in enumerate(self._tasks, start=1) if task.matches(keyword)]

    def size(self) -> int:
        return len(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskList):
            return NotImplemented
        return self._tasks == other._tasks

    def __repr__(self) -> str:
        return f"TaskList({self._tasks!r})"
