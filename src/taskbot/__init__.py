"""Taskbot - a line-oriented to-do list with deadlines and events."""

__version__ = "0.1.0"
__author__ = "Taskbot Team"

from .task import Task, Todo, Deadline, Event, TaskStatus, TaskList
from .storage import Storage
from .parser import parse_command

__all__ = [
    "Task",
    "Todo",
    "Deadline",
    "Event",
    "TaskStatus",
    "TaskList",
    "Storage",
    "parse_command",
    "__version__",
]
