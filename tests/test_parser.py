"""Tests for the command parser."""

from datetime import datetime

import pytest

from taskbot.commands import (
    AddCommand,
    DeleteCommand,
    ExitCommand,
    FindCommand,
    InvalidCommand,
    ListCommand,
    MarkAsDoneCommand,
)
from taskbot.exceptions import DateTimeParseError
from taskbot.parser import (
    parse_command,
    suggest_keyword,
    try_add_deadline,
    try_add_event,
    try_add_todo,
    try_delete,
    try_find,
    try_mark_as_done,
)
from taskbot.task import Deadline, Event, Todo


BLANKS = ["", " ", "   ", "\t"]


class TestBlankArguments:
    """Every command rejects blank arguments with its own message."""

    @pytest.mark.parametrize("args", BLANKS)
    def test_add_commands(self, args):
        expected = InvalidCommand("the description of a task cannot be empty!")
        assert try_add_todo(args) == expected
        assert try_add_deadline(args) == expected
        assert try_add_event(args) == expected

    @pytest.mark.parametrize("args", BLANKS)
    def test_delete(self, args):
        assert try_delete(args) == InvalidCommand("the task number to be deleted cannot be empty!")

    @pytest.mark.parametrize("args", BLANKS)
    def test_mark_as_done(self, args):
        assert try_mark_as_done(args) == InvalidCommand(
            "the task number to be marked as done cannot be empty!"
        )

    @pytest.mark.parametrize("args", BLANKS)
    def test_find(self, args):
        assert try_find(args) == InvalidCommand("the search keyword cannot be empty!")


class TestAddDeadline:
    def test_valid(self):
        command = try_add_deadline("submit report /by 2024-01-01 1800")
        assert command == AddCommand(Deadline("submit report", datetime(2024, 1, 1, 18, 0)))

    def test_missing_separator(self):
        assert try_add_deadline("no separator here") == InvalidCommand(
            "invalid format! please follow 'deadline <description> /by <date>'!"
        )

    def test_wrong_separator(self):
        """An event separator is not accepted for a deadline."""
        assert try_add_deadline("report /at 2024-01-01 1800") == InvalidCommand(
            "invalid format! please follow 'deadline <description> /by <date>'!"
        )

    def test_splits_at_last_separator(self):
        command = try_add_deadline("read /by the book /by 2024-01-01 1800")
        assert command.task.description == "read /by the book"
        assert command.task.by == datetime(2024, 1, 1, 18, 0)

    def test_parts_are_trimmed(self):
        command = try_add_deadline("  submit report   /by   2024-01-01 1800  ")
        assert command.task.description == "submit report"
        assert command.task.by == datetime(2024, 1, 1, 18, 0)

    def test_empty_description_before_separator(self):
        assert try_add_deadline("  /by 2024-01-01 1800") == InvalidCommand(
            "the description of a task cannot be empty!"
        )

    def test_bad_date_propagates(self):
        with pytest.raises(DateTimeParseError):
            try_add_deadline("submit report /by qwertyuiop")


class TestAddEvent:
    def test_valid(self):
        command = try_add_event("project meeting /at 2024-01-03 1400")
        assert command == AddCommand(Event("project meeting", datetime(2024, 1, 3, 14, 0)))

    def test_missing_separator(self):
        assert try_add_event("project meeting tomorrow") == InvalidCommand(
            "invalid format! please follow 'event <description> /at <date>'!"
        )

    def test_bad_date_propagates(self):
        with pytest.raises(DateTimeParseError):
            try_add_event("meeting /at 2024-13-45")


class TestLineBreaks:
    """A description may not span lines, since the data file holds one task per line."""

    MESSAGE = "the description of a task cannot contain line breaks!"

    @pytest.mark.parametrize("args", ["line one\nline two", "a\rb", "trailing\n"])
    def test_todo(self, args):
        assert try_add_todo(args) == InvalidCommand(self.MESSAGE)

    def test_deadline(self):
        assert try_add_deadline("line one\nline two /by 2024-01-01 1800") == InvalidCommand(self.MESSAGE)
        assert try_add_deadline("a\rb /by 2024-01-01 1800") == InvalidCommand(self.MESSAGE)

    def test_event(self):
        assert try_add_event("line one\r\nline two /at 2024-01-03 1400") == InvalidCommand(self.MESSAGE)

    def test_through_parse_command(self):
        assert parse_command("todo a\nb") == InvalidCommand(self.MESSAGE)

    def test_find_keyword_not_checked(self):
        assert try_find("a\nb") == FindCommand("a\nb")


class TestAddTodo:
    def test_raw_description_kept(self):
        assert try_add_todo("read book") == AddCommand(Todo("read book"))

    def test_trailing_space_kept(self):
        assert parse_command("todo read book ") == AddCommand(Todo("read book "))

    def test_separators_not_parsed(self):
        assert try_add_todo("read /by tomorrow") == AddCommand(Todo("read /by tomorrow"))


class TestTaskNumbers:
    def test_delete(self):
        assert try_delete("3") == DeleteCommand(3)

    def test_delete_not_a_number(self):
        assert try_delete("abc") == InvalidCommand("invalid task number!")

    def test_mark_as_done(self):
        assert try_mark_as_done(" 2 ") == MarkAsDoneCommand(2)

    def test_mark_as_done_not_a_number(self):
        assert try_mark_as_done("2.5") == InvalidCommand("invalid task number!")

    def test_no_range_check(self):
        """Range checks happen when the command runs, not here."""
        assert try_delete("999") == DeleteCommand(999)
        assert try_mark_as_done("0") == MarkAsDoneCommand(0)


class TestFind:
    def test_keyword_kept_raw(self):
        assert try_find("book ") == FindCommand("book ")

    def test_trailing_space_reaches_find(self):
        assert parse_command("find book ") == FindCommand("book ")


class TestParseCommand:
    """Test keyword dispatch."""

    def test_dispatch(self):
        assert parse_command("todo read book") == AddCommand(Todo("read book"))
        assert parse_command("delete 2") == DeleteCommand(2)
        assert parse_command("done 1") == MarkAsDoneCommand(1)
        assert parse_command("find book") == FindCommand("book")
        assert parse_command("list") == ListCommand()
        assert parse_command("bye") == ExitCommand()

    def test_trailing_whitespace_after_keyword(self):
        assert parse_command("list  ") == ListCommand()
        assert parse_command("bye\t") == ExitCommand()

    def test_keyword_case_insensitive(self):
        assert parse_command("LIST") == ListCommand()
        assert parse_command("Todo read book") == AddCommand(Todo("read book"))

    def test_keyword_without_arguments(self):
        assert parse_command("todo") == InvalidCommand("the description of a task cannot be empty!")
        assert parse_command("delete") == InvalidCommand("the task number to be deleted cannot be empty!")

    @pytest.mark.parametrize("line", ["blah", "", "   ", "todos read"])
    def test_unknown_keyword(self, line):
        assert parse_command(line) == InvalidCommand("sorry, I don't know what that means!")

    def test_bad_date_becomes_invalid(self):
        command = parse_command("deadline report /by 2024-13-45")
        assert isinstance(command, InvalidCommand)
        assert command.message.startswith("invalid date!")

    def test_exit_flag(self):
        assert parse_command("bye").is_exit
        assert not parse_command("list").is_exit


class TestSuggestKeyword:
    def test_close_typo(self):
        assert suggest_keyword("deadlin report /by tomorrow") == "deadline"

    def test_known_keyword_has_no_suggestion(self):
        assert suggest_keyword("list") is None

    def test_nothing_close(self):
        assert suggest_keyword("xyzzy") is None
