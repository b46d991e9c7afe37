# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

VIEW_TIME_FORMAT = "%d-%m-%Y %H:%M"
DEFAULT_DESCRIPTION_WIDTH = 28
ELLIPSIS = "..."


class Priority(StrEnum):
    """
    Task priority.

    Declared in ascending order; `rank` gives the total order used for sorting
    (LOW < MEDIUM < HIGH).
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: str) -> Priority:
        """Case-insensitive lookup by name. Raises ValueError on unknown names."""
        name = (raw or "").strip().upper()
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown priority: {raw!r}") from None


_PRIORITY_RANK = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


def truncate(text: str | None, width: int) -> str:
    if text is None:
        return ""
    if len(text) <= width:
        return text
    return text[: max(0, width - len(ELLIPSIS))] + ELLIPSIS


def format_view_time(ts: datetime | None) -> str:
    return ts.strftime(VIEW_TIME_FORMAT) if ts is not None else "Not completed"


def _require_description(text: str) -> str:
    clean = (text or "").strip()
    if not clean:
        raise ValueError("description is required")
    return clean


@dataclass(slots=True)
class Task:
    """
    One to-do item.

    `created_at` is set once at construction; `completed_at` is set once by
    `mark_completed` and is present only while `completed` is true.
    """

    id: int
    description: str
    priority: Priority
    created_at: datetime
    completed: bool = False
    completed_at: datetime | None = None

    @classmethod
    def create(
        cls,
        task_id: int,
        description: str,
        priority: Priority = Priority.MEDIUM,
        *,
        now: datetime | None = None,
    ) -> Task:
        return cls(
            id=task_id,
            description=_require_description(description),
            priority=priority,
            created_at=now if now is not None else datetime.now(),
        )

    @property
    def status_label(self) -> str:
        return "✔ Completed" if self.completed else "✘ Pending"

    def mark_completed(self, *, now: datetime | None = None) -> bool:
        """Return True if this call completed the task, False if it already was."""
        if self.completed:
            return False
        ts = now if now is not None else datetime.now()
        # A clock step backwards must not break created_at <= completed_at.
        self.completed_at = max(ts, self.created_at)
        self.completed = True
        return True

    def set_description(self, text: str) -> None:
        self.description = _require_description(text)

    def set_priority(self, priority: Priority) -> None:
        self.priority = priority

    def summary(self, width: int = DEFAULT_DESCRIPTION_WIDTH) -> str:
        return (
            f"ID: {self.id} | {truncate(self.description, width)} | "
            f"Priority: {self.priority.value} | Status: {self.status_label} | "
            f"Created: {format_view_time(self.created_at)} | "
            f"Completed: {format_view_time(self.completed_at)}"
        )


class TaskIdAllocator:
    """Hands out task ids; never goes backwards and never reuses an id."""

    def __init__(self, next_id: int = 1) -> None:
        self._next_id = max(1, int(next_id))

    def peek(self) -> int:
        return self._next_id

    def allocate(self) -> int:
        task_id = self._next_id
        self._next_id += 1
        return task_id

    def observe(self, task_id: int) -> None:
        if task_id >= self._next_id:
            self._next_id = task_id + 1
