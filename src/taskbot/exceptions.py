"""Exception hierarchy for Taskbot."""

from typing import Optional


class TaskbotError(Exception):
    """Base class for all Taskbot errors."""


class StorageError(TaskbotError):
    """Raised when the data file cannot be read or created.

    Load failures are not recoverable; the caller is expected to abort.
    """


class CorruptDataError(StorageError):
    """Raised when a line of the data file cannot be decoded."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"{message} (line {line_number}: {line!r})"
        super().__init__(message)


class DateTimeParseError(TaskbotError, ValueError):
    """Raised when a date/time string cannot be understood."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Unrecognised date/time: {text!r}")


class TaskIndexError(TaskbotError, IndexError):
    """Raised when a task number does not refer to a task in the list."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Task number {index} is out of range (1-{size})")
