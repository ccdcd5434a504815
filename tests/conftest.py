"""Pytest configuration and shared fixtures."""

import logging
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taskbot.config import Config  # noqa: E402
from taskbot.storage import Storage  # noqa: E402
from taskbot.task import Deadline, Event, TaskList, TaskStatus, Todo  # noqa: E402
from taskbot.ui import Ui  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config():
    """Drop the cached configuration between tests."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture
def restore_root_logger():
    """Drop the handlers setup_logging installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "data" / "tasks.txt"


@pytest.fixture
def storage(data_path):
    return Storage(data_path)


@pytest.fixture
def ui():
    return Ui()


@pytest.fixture
def sample_tasks():
    """A task list with one task of each kind."""
    return TaskList([
        Todo("read book"),
        Deadline("submit report", datetime(2024, 1, 1, 18, 0), TaskStatus.DONE),
        Event("project meeting", datetime(2024, 1, 3, 14, 30)),
    ])
