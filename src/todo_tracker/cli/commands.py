# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.state import AppState
from ..tasks.task_models import (
    DEFAULT_DESCRIPTION_WIDTH,
    Priority,
    Task,
    format_view_time,
    truncate,
)
from ..tasks.task_store import SortCriterion, TaskOpResult

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

INVALID_NUMBER = "Invalid number. Try again."
SAVE_WARNING = "Warning: could not save tasks to file."

SORT_ALIASES: dict[str, SortCriterion] = {
    "priority": SortCriterion.PRIORITY_DESC,
    "prio": SortCriterion.PRIORITY_DESC,
    "newest": SortCriterion.CREATED_DESC,
    "oldest": SortCriterion.CREATED_ASC,
    "status": SortCriterion.STATUS_DESC,
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing helpers (input validation lives here, not in the store) ----


def parse_priority_or_default(raw: str | None, default: Priority) -> tuple[Priority, bool]:
    """Return (priority, used_default). Unknown input falls back to `default`."""
    try:
        return Priority.parse(raw or ""), False
    except ValueError:
        return default, True


def _parse_id(raw: str) -> int | None:
    try:
        return int(raw.strip().rstrip("."))
    except ValueError:
        return None


def _width(state: AppState) -> int:
    return int(getattr(state.settings, "description_width", DEFAULT_DESCRIPTION_WIDTH))


def _with_save_warning(state: AppState, reply: str) -> str:
    if not state.task_store.last_save_ok:
        return f"{reply}\n{SAVE_WARNING}"
    return reply


def format_task_table(tasks: Sequence[Task], width: int = DEFAULT_DESCRIPTION_WIDTH) -> str:
    if not tasks:
        return "No tasks to show."

    row = f"{{:<5}} {{:<{width}}} {{:<8}} {{:<12}} {{:<19}} {{:<19}}"
    header = row.format("ID", "Description", "Pri", "Status", "Created", "Completed")
    lines = ["TASK LIST", header, "-" * len(header)]
    for t in tasks:
        lines.append(
            row.format(
                t.id,
                truncate(t.description, width),
                t.priority.value,
                t.status_label,
                format_view_time(t.created_at),
                format_view_time(t.completed_at),
            )
        )
    return "\n".join(lines)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <description...>              -> MEDIUM priority
    /add -p <priority> <description...>
    """
    priority = Priority.MEDIUM
    notice = ""
    if args and args[0].lower() in ("-p", "--priority"):
        if len(args) < 2:
            return "Usage: /add [-p LOW|MEDIUM|HIGH] <description>"
        priority, defaulted = parse_priority_or_default(args[1], Priority.MEDIUM)
        if defaulted:
            notice = f"Invalid priority! Defaulting to {Priority.MEDIUM.value}.\n"
        args = args[2:]

    description = " ".join(args).strip()
    if not description:
        return notice + "Task description cannot be empty!"

    task = state.task_store.add_task(description, priority)
    return _with_save_warning(state, f"{notice}Task {task.id} added ({task.priority.value}).")


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list          -> all tasks
    /list done     -> completed only
    /list pending  -> pending only
    """
    store = state.task_store
    sub = args[0].lower() if args else "all"
    if sub == "all":
        tasks = store.list_all()
    elif sub in ("done", "completed"):
        tasks = store.list_completed()
    elif sub in ("pending", "todo"):
        tasks = store.list_pending()
    else:
        return "Usage: /list [all|done|pending]"
    return format_task_table(tasks, _width(state))


def cmd_show(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /show <id>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return INVALID_NUMBER
    task = state.task_store.find_by_id(task_id)
    if task is None:
        return "Task not found."
    return task.summary(_width(state))


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <id>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return INVALID_NUMBER
    result = state.task_store.complete_by_id(task_id)
    if result is TaskOpResult.OK:
        return _with_save_warning(state, "Task marked as completed!")
    logger.debug("complete id=%s -> %s", task_id, result.value)
    return "Task not found or already completed."


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <id>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return INVALID_NUMBER
    if state.task_store.delete_by_id(task_id) is TaskOpResult.OK:
        return _with_save_warning(state, "Task deleted.")
    return "Task not found."


def cmd_edit(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <id> <new description>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return INVALID_NUMBER
    result = state.task_store.edit_description(task_id, " ".join(args[1:]))
    if result is TaskOpResult.NOT_FOUND:
        return "Task not found."
    if result is TaskOpResult.EMPTY_DESCRIPTION:
        return "Description cannot be empty."
    return _with_save_warning(state, "Description updated.")


def cmd_prio(state: AppState, args: list[str]) -> str:
    """
    /prio <id> <LOW|MEDIUM|HIGH>

    An unknown priority keeps the task's current one (with a notice).
    """
    if len(args) != 2:
        return "Usage: /prio <id> <LOW|MEDIUM|HIGH>"
    task_id = _parse_id(args[0])
    if task_id is None:
        return INVALID_NUMBER
    store = state.task_store
    task = store.find_by_id(task_id)
    if task is None:
        return "Task not found."

    priority, defaulted = parse_priority_or_default(args[1], task.priority)
    notice = f"Invalid priority! Defaulting to {priority.value}.\n" if defaulted else ""
    store.change_priority(task_id, priority)
    return _with_save_warning(state, f"{notice}Priority updated.")


def cmd_sort(state: AppState, args: list[str]) -> str:
    """
    /sort priority  -> HIGH first, ties newest first
    /sort newest    -> created date, newest first
    /sort oldest    -> created date, oldest first
    /sort status    -> completed first, ties newest first
    """
    if len(args) != 1 or args[0].lower() not in SORT_ALIASES:
        return "Usage: /sort priority|newest|oldest|status"
    store = state.task_store
    store.sort_by(SORT_ALIASES[args[0].lower()])
    return _with_save_warning(state, format_task_table(store.list_all(), _width(state)))


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    total = store.count_tasks()
    done = len(store.list_completed())
    save = "OK" if store.last_save_ok else "FAILED"
    return (
        "Status:\n"
        f"  File: {store.path}\n"
        f"  Tasks: {total} ({done} completed, {total - done} pending)\n"
        f"  Next id: {store.next_id}\n"
        f"  Last save: {save}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add [-p LOW|MEDIUM|HIGH] <description>."
)
registry.register("list", cmd_list, help_text="List tasks: /list [all|done|pending].", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["delete"])
registry.register("edit", cmd_edit, help_text="Edit a description: /edit <id> <text>.")
registry.register("prio", cmd_prio, help_text="Change priority: /prio <id> <LOW|MEDIUM|HIGH>.")
registry.register(
    "sort", cmd_sort, help_text="Sort and save order: /sort priority|newest|oldest|status."
)
registry.register("status", cmd_status, help_text="Show file path, counts and last save result.")
