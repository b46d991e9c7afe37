# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import StrEnum
from pathlib import Path

from .task_file import load_tasks, save_tasks
from .task_models import Priority, Task, TaskIdAllocator

logger = logging.getLogger(__name__)


class TaskOpResult(StrEnum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_COMPLETED = "already_completed"
    EMPTY_DESCRIPTION = "empty_description"


class SortCriterion(StrEnum):
    PRIORITY_DESC = "priority_desc"
    CREATED_DESC = "created_desc"
    CREATED_ASC = "created_asc"
    STATUS_DESC = "status_desc"


class TaskStore:
    """
    In-memory ordered task list backed by a flat file.

    The store is the only owner of the list and of the id allocator. Every
    mutation rewrites the whole file; a failed write is logged and recorded in
    `last_save_ok`, while the in-memory change stands.

    Not thread-safe: one store per process, driven by one caller.
    """

    def __init__(
        self,
        path: str | Path = "tasks.txt",
        *,
        clock: Callable[[], datetime] = datetime.now,
        autoload: bool = True,
    ) -> None:
        self._path = Path(path)
        self._clock = clock
        self._tasks: list[Task] = load_tasks(self._path) if autoload else []
        self._ids = TaskIdAllocator()
        for task in self._tasks:
            self._ids.observe(task.id)
        self.last_save_ok = True
        logger.info(
            "TaskStore ready path=%s total=%s next_id=%s",
            self._path,
            len(self._tasks),
            self._ids.peek(),
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._ids.peek()

    # ---- persistence ----

    def _persist(self) -> bool:
        self.last_save_ok = save_tasks(self._path, self._tasks)
        return self.last_save_ok

    # ---- queries ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def find_by_id(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def list_all(self) -> list[Task]:
        return list(self._tasks)

    def list_completed(self) -> list[Task]:
        return [t for t in self._tasks if t.completed]

    def list_pending(self) -> list[Task]:
        return [t for t in self._tasks if not t.completed]

    # ---- mutations ----

    def add_task(self, description: str, priority: Priority = Priority.MEDIUM) -> Task:
        # Validate before allocating so a rejected add does not burn an id.
        if not description or not description.strip():
            raise ValueError("description is required")

        task = Task.create(self._ids.allocate(), description, priority, now=self._clock())
        self._tasks.append(task)
        self._persist()
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        return task

    def complete_by_id(self, task_id: int) -> TaskOpResult:
        task = self.find_by_id(task_id)
        if task is None:
            logger.debug("complete: task id=%s not found", task_id)
            return TaskOpResult.NOT_FOUND
        if not task.mark_completed(now=self._clock()):
            logger.debug("complete: task id=%s already completed", task_id)
            return TaskOpResult.ALREADY_COMPLETED
        self._persist()
        return TaskOpResult.OK

    def delete_by_id(self, task_id: int) -> TaskOpResult:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[idx]
                self._persist()
                logger.debug("Task deleted id=%s", task_id)
                return TaskOpResult.OK
        return TaskOpResult.NOT_FOUND

    def edit_description(self, task_id: int, description: str) -> TaskOpResult:
        task = self.find_by_id(task_id)
        if task is None:
            return TaskOpResult.NOT_FOUND
        try:
            task.set_description(description)
        except ValueError:
            return TaskOpResult.EMPTY_DESCRIPTION
        self._persist()
        return TaskOpResult.OK

    def change_priority(self, task_id: int, priority: Priority) -> TaskOpResult:
        task = self.find_by_id(task_id)
        if task is None:
            return TaskOpResult.NOT_FOUND
        task.set_priority(priority)
        self._persist()
        return TaskOpResult.OK

    def sort_by(self, criterion: SortCriterion) -> None:
        """
        Reorder the live list and persist the new order.

        - PRIORITY_DESC: HIGH first, ties newest-created first
        - CREATED_DESC: newest first
        - CREATED_ASC: oldest first
        - STATUS_DESC: completed first, ties newest-created first
        """
        criterion = SortCriterion(criterion)
        if criterion is SortCriterion.PRIORITY_DESC:
            self._tasks.sort(key=lambda t: (t.priority.rank, t.created_at), reverse=True)
        elif criterion is SortCriterion.CREATED_DESC:
            self._tasks.sort(key=lambda t: t.created_at, reverse=True)
        elif criterion is SortCriterion.CREATED_ASC:
            self._tasks.sort(key=lambda t: t.created_at)
        else:
            self._tasks.sort(key=lambda t: (t.completed, t.created_at), reverse=True)
        self._persist()
        logger.debug("Tasks sorted by %s", criterion.value)
