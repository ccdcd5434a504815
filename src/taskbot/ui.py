"""Response strings shown to the user after a command runs."""

from typing import List, Sequence, Tuple

from .task import Task, TaskList


GREETING = "hello! I'm taskbot.\nwhat can I do for you?"
FAREWELL = "bye! hope to see you again soon!"
SAVE_WARNING = "warning: your tasks could not be saved to disk!"


def _numbered(entries: Sequence[Tuple[int, Task]]) -> List[str]:
    return [f"{number}. {task}" for number, task in entries]


def _count(size: int) -> str:
    return f"{size} task" if size == 1 else f"{size} tasks"


class Ui:
    """Builds the text for each kind of command response.

    Only strings are produced here; printing is left to the caller.
    """

    def show_greeting(self) -> str:
        return GREETING

    def show_farewell(self) -> str:
        return FAREWELL

    def show_add_response(self, task: Task, size: int) -> str:
        return (
            "got it. I've added this task:\n"
            f"  {task}\n"
            f"now you have {_count(size)} in the list."
        )

    def show_delete_response(self, task: Task, size: int) -> str:
        return (
            "noted. I've removed this task:\n"
            f"  {task}\n"
            f"now you have {_count(size)} in the list."
        )

    def show_done_response(self, task: Task) -> str:
        return f"nice! I've marked this task as done:\n  {task}"

    def show_list(self, tasks: TaskList) -> str:
        if not len(tasks):
            return "your task list is empty!"
        lines = ["here are the tasks in your list:"]
        lines.extend(_numbered(list(enumerate(tasks, start=1))))
        return "\n".join(lines)

    def show_find_results(self, matches: Sequence[Tuple[int, Task]]) -> str:
        if not matches:
            return "no matching tasks found!"
        lines = ["here are the matching tasks in your list:"]
        lines.extend(_numbered(matches))
        return "\n".join(lines)

    def show_no_such_task(self, index: int) -> str:
        return f"there is no task number {index}!"

    def show_save_warning(self) -> str:
        return SAVE_WARNING
