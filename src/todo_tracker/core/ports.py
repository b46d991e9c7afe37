# src/todo_tracker/core/ports.py

"""
Ports (interfaces) used by the command layer.

Commands depend on this Protocol instead of the concrete TaskStore, which
keeps them testable against a fake.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..tasks.task_models import Priority, Task
from ..tasks.task_store import SortCriterion, TaskOpResult


class TaskRepo(Protocol):
    last_save_ok: bool

    @property
    def path(self) -> Path: ...
    @property
    def next_id(self) -> int: ...

    def count_tasks(self) -> int: ...
    def find_by_id(self, task_id: int) -> Task | None: ...
    def list_all(self) -> list[Task]: ...
    def list_completed(self) -> list[Task]: ...
    def list_pending(self) -> list[Task]: ...

    def add_task(self, description: str, priority: Priority = Priority.MEDIUM) -> Task: ...
    def complete_by_id(self, task_id: int) -> TaskOpResult: ...
    def delete_by_id(self, task_id: int) -> TaskOpResult: ...
    def edit_description(self, task_id: int, description: str) -> TaskOpResult: ...
    def change_priority(self, task_id: int, priority: Priority) -> TaskOpResult: ...
    def sort_by(self, criterion: SortCriterion) -> None: ...
