# tests/test_task_codec.py

from __future__ import annotations

from datetime import datetime

import pytest

from todo_tracker.tasks.task_codec import CorruptRecord, decode_task, encode_task
from todo_tracker.tasks.task_models import Priority, Task

T0 = datetime(2026, 10, 19, 9, 30)


def test_encode_layout() -> None:
    task = Task(id=1, description="buy milk", priority=Priority.LOW, created_at=T0)

    assert encode_task(task) == "1|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null"


@pytest.mark.parametrize(
    "description",
    [
        "buy milk",
        "pipe | inside | text",
        "line one\nline two\r\nline three",
        "unicode: Привет, 世界 ✔",
        "||",
    ],
)
def test_round_trip_pending(description: str) -> None:
    task = Task(
        id=12,
        description=description,
        priority=Priority.MEDIUM,
        created_at=datetime(2026, 10, 19, 9, 30, 15, 123456),
    )

    line = encode_task(task)

    assert "\n" not in line
    assert line.count("|") == 5
    assert decode_task(line) == task


def test_round_trip_completed() -> None:
    task = Task(
        id=3,
        description="ship release",
        priority=Priority.HIGH,
        created_at=T0,
        completed=True,
        completed_at=datetime(2026, 10, 20, 7, 0, 0, 1),
    )

    assert decode_task(encode_task(task)) == task


def test_decode_ignores_trailing_newline() -> None:
    decoded = decode_task("1|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null\n")

    assert isinstance(decoded, Task)
    assert decoded.description == "buy milk"


@pytest.mark.parametrize(
    "line",
    [
        "1|YnV5IG1pbGs=|LOW|false",
        "1|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null|",
        "x|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null",
        "0|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null",
        "1_0|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null",
        " 3 |YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null",
        "+3|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null",
        "٣|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|null",
        "1|not base64!|LOW|false|2026-10-19T09:30:00|null",
        "1||LOW|false|2026-10-19T09:30:00|null",
        "1|YnV5IG1pbGs=|URGENT|false|2026-10-19T09:30:00|null",
        "1|YnV5IG1pbGs=|low|false|2026-10-19T09:30:00|null",
        "1|YnV5IG1pbGs=|LOW|yes|2026-10-19T09:30:00|null",
        "1|YnV5IG1pbGs=|LOW|false|19-10-2026 09:30|null",
        "1|YnV5IG1pbGs=|LOW|false|2026-10-19|null",
        "1|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00+02:00|null",
        "1|YnV5IG1pbGs=|LOW|true|2026-10-19T09:30:00|null",
        "1|YnV5IG1pbGs=|LOW|false|2026-10-19T09:30:00|2026-10-19T10:00:00",
        "1|YnV5IG1pbGs=|LOW|true|2026-10-19T09:30:00|2026-10-18T10:00:00",
        "",
    ],
)
def test_decode_corrupt_lines(line: str) -> None:
    result = decode_task(line)

    assert isinstance(result, CorruptRecord)
    assert result.line == line
    assert result.reason
