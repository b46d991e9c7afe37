# tests/test_task_file.py

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest

from todo_tracker.tasks.task_codec import encode_task
from todo_tracker.tasks.task_file import load_tasks, save_tasks
from todo_tracker.tasks.task_models import Priority, Task

GOOD = "1|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null"


def _task(task_id: int, description: str = "task", **kw) -> Task:
    return Task(
        id=task_id,
        description=description,
        priority=kw.pop("priority", Priority.MEDIUM),
        created_at=kw.pop("created_at", datetime(2026, 10, 19, 9, task_id)),
        **kw,
    )


def test_load_missing_file_returns_empty(tmp_path: Path) -> None:
    assert load_tasks(tmp_path / "nope" / "tasks.txt") == []


def test_load_skips_blank_and_corrupt_lines(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "tasks.txt"
    path.write_text(
        "\n".join(
            [
                GOOD,
                "",
                "   ",
                "2|c2hpcA==|HIGH|false",
                "garbage",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING):
        tasks = load_tasks(path)

    assert [t.id for t in tasks] == [1]
    assert tasks[0].description == "buy milk"
    assert "Skipped 2" in caplog.text


def test_load_skips_invalid_utf8_line_and_keeps_the_rest(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    second = encode_task(_task(2, "second"))
    path.write_bytes(GOOD.encode("utf-8") + b"\n" + b"\xff\xfe garbage\n" + second.encode("utf-8") + b"\n")

    tasks = load_tasks(path)

    assert [t.id for t in tasks] == [1, 2]


def test_load_keeps_file_order_and_drops_duplicate_ids(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    lines = [encode_task(_task(i, f"t{i}")) for i in (5, 2, 9)]
    lines.append(encode_task(_task(2, "duplicate")))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    tasks = load_tasks(path)

    assert [t.id for t in tasks] == [5, 2, 9]
    assert tasks[1].description == "t2"


def test_load_unreadable_path_degrades_to_empty(tmp_path: Path) -> None:
    # A directory where the file should be cannot be opened for reading.
    path = tmp_path / "tasks.txt"
    path.mkdir()

    assert load_tasks(path) == []


def test_save_then_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.txt"
    done = _task(2, "pipe | and\nnewline", priority=Priority.HIGH)
    done.mark_completed(now=datetime(2026, 10, 20, 12, 0))
    tasks = [_task(1, "first"), done]

    assert save_tasks(path, tasks) is True

    assert path.read_text(encoding="utf-8").count("\n") == 2
    assert load_tasks(path) == tasks
    assert not path.with_name("tasks.txt.tmp").exists()


def test_save_overwrites_previous_content(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    save_tasks(path, [_task(1), _task(2), _task(3)])
    save_tasks(path, [_task(3)])

    assert [t.id for t in load_tasks(path)] == [3]


def test_save_empty_list_writes_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "tasks.txt"
    save_tasks(path, [_task(1)])
    save_tasks(path, [])

    assert path.read_text(encoding="utf-8") == ""
    assert load_tasks(path) == []


def test_save_failure_returns_false(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "tasks.txt"
    path.mkdir()

    with caplog.at_level(logging.WARNING):
        ok = save_tasks(path, [_task(1)])

    assert ok is False
    assert "Could not save tasks" in caplog.text
    assert not path.with_name("tasks.txt.tmp").exists()
