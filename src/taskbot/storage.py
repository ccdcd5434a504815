"""Storage layer for Taskbot using a line-oriented text file.

Each task is one line of ``|``-separated fields::

    T|0|read book
    D|1|submit report|2024-01-01T18:00:00
    E|0|project meeting|2024-01-03T14:00:00

Fields are: type code, status (``1`` done, ``0`` not done), description and,
for deadlines and events, the date-time. ``|`` inside a description is not
escaped, so such descriptions do not survive a reload.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Type, Union

from .exceptions import CorruptDataError, DateTimeParseError, StorageError
from .task import Deadline, Event, Task, TaskStatus, Todo
from .utils.datetime import parse_datetime, to_storage_string


logger = logging.getLogger(__name__)

SEPARATOR = "|"
STATUS_DONE = "1"
STATUS_NOT_DONE = "0"
DEFAULT_SAVE_RETRIES = 2

TASK_TYPES: Dict[str, Type[Task]] = {
    Todo.TYPE_CODE: Todo,
    Deadline.TYPE_CODE: Deadline,
    Event.TYPE_CODE: Event,
}

_STATUS_CODES = {
    TaskStatus.DONE: STATUS_DONE,
    TaskStatus.NOT_DONE: STATUS_NOT_DONE,
}
_STATUS_BY_CODE = {code: status for status, code in _STATUS_CODES.items()}


def encode_task(task: Task) -> str:
    """Convert a task to its data file line (without the newline)."""
    fields = [task.TYPE_CODE, _STATUS_CODES[task.status], task.description]
    if task.when is not None:
        fields.append(to_storage_string(task.when))
    return SEPARATOR.join(fields)


def decode_line(line: str, line_number: Optional[int] = None) -> Task:
    """Parse a data file line back to a task.

    Raises:
        CorruptDataError: If the type code or status is unknown, a field is
            missing, or the stored date cannot be parsed.
    """
    fields = line.split(SEPARATOR)
    if len(fields) < 3:
        raise CorruptDataError("Too few fields", line_number, line)

    type_code, status_code, description = fields[0], fields[1], fields[2]

    task_type = TASK_TYPES.get(type_code)
    if task_type is None:
        raise CorruptDataError(f"Unknown task type {type_code!r}", line_number, line)

    status = _STATUS_BY_CODE.get(status_code)
    if status is None:
        raise CorruptDataError(f"Unknown task status {status_code!r}", line_number, line)

    if task_type is Todo:
        return Todo(description, status)

    if len(fields) < 4:
        raise CorruptDataError("Missing date", line_number, line)
    try:
        when = parse_datetime(fields[3])
    except DateTimeParseError as e:
        raise CorruptDataError(str(e), line_number, line) from e

    return task_type(description, when, status)


class Storage:
    """Loads and saves the task list at a fixed file path."""

    def __init__(self, path: Union[str, Path], retries: int = DEFAULT_SAVE_RETRIES):
        self.path = Path(path)
        self.retries = retries

    def load(self) -> List[Task]:
        """Load the tasks stored at the path.

        A missing file is created empty. Any failure to read the file is
        fatal and raised as ``StorageError``.

        Returns:
            The stored tasks, in file order.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if self.path.is_file():
                return self._read()
            if self.path.exists():
                raise StorageError(f"Data path {self.path} exists but is not a file")
            self.path.touch()
            logger.info(f"Created new data file at {self.path}")
            return []
        except OSError as e:
            raise StorageError(f"Could not load tasks from {self.path}: {e}") from e

    def _read(self) -> List[Task]:
        tasks = []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                for line_number, raw in enumerate(f, start=1):
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    tasks.append(decode_line(line, line_number))
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"Data file {self.path} is not valid UTF-8: {e}") from e
        logger.debug(f"Loaded {len(tasks)} tasks from {self.path}")
        return tasks

    def save(self, tasks: Iterable[Task], retries: Optional[int] = None) -> bool:
        """Rewrite the data file with the given tasks.

        A failed write is retried up to ``retries`` more times (the instance
        default when not given). Errors never propagate; the return value and
        the log tell whether the write went through.

        Returns:
            True if the file was written, False if every attempt failed.
        """
        if retries is None:
            retries = self.retries
        tasks = list(tasks)
        attempts = 1 + max(retries, 0)

        for attempt in range(1, attempts + 1):
            try:
                self._write(tasks)
                return True
            except OSError as e:
                logger.warning(f"Save attempt {attempt}/{attempts} to {self.path} failed: {e}")
                if attempt < attempts:
                    self._prepare_retry()

        logger.error(f"Giving up saving {len(tasks)} tasks to {self.path} after {attempts} attempts")
        return False

    def _write(self, tasks: List[Task]) -> None:
        """Write all tasks to a temporary file and move it over the data file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for task in tasks:
                    f.write(encode_task(task) + "\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _prepare_retry(self) -> None:
        """Recreate the directory and an empty data file if they have vanished."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.touch()
        except OSError as e:
            logger.warning(f"Could not recreate {self.path} before retrying: {e}")
