# src/todo_tracker/tasks/task_codec.py

"""
Line codec for persisted tasks.

Record layout (one task per line):

    id|base64(utf-8 description)|priority|true/false|created_at|completed_at or null

Timestamps are naive local ISO-8601 date-times (`datetime.isoformat()`).
The description is base64-encoded so it can never contain the delimiter or
a raw newline.

Decoding never raises: a malformed line yields a `CorruptRecord` and the
caller decides what to do with it (the file loader skips it).
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime

from .task_models import Priority, Task

DELIMITER = "|"
NULL_TOKEN = "null"
FIELD_COUNT = 6

_BOOL_TOKENS = {"true": True, "false": False}


@dataclass(frozen=True, slots=True)
class CorruptRecord:
    line: str
    reason: str


DecodeResult = Task | CorruptRecord


def _encode_text(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def _decode_text(raw: str) -> str:
    return base64.b64decode(raw.encode("ascii"), validate=True).decode("utf-8")


def _parse_timestamp(raw: str) -> datetime:
    # Require a full date-time; fromisoformat also accepts bare dates.
    if "T" not in raw:
        raise ValueError(f"not a date-time: {raw!r}")
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is not None:
        raise ValueError(f"unexpected UTC offset: {raw!r}")
    return ts


def encode_task(task: Task) -> str:
    completed_at = NULL_TOKEN if task.completed_at is None else task.completed_at.isoformat()
    return DELIMITER.join(
        (
            str(task.id),
            _encode_text(task.description),
            task.priority.value,
            "true" if task.completed else "false",
            task.created_at.isoformat(),
            completed_at,
        )
    )


def decode_task(line: str) -> DecodeResult:
    raw_line = line.rstrip("\r\n")
    # str.split keeps trailing empty fields.
    parts = raw_line.split(DELIMITER)
    if len(parts) != FIELD_COUNT:
        return CorruptRecord(raw_line, f"expected {FIELD_COUNT} fields, got {len(parts)}")

    raw_id, raw_desc, raw_priority, raw_completed, raw_created, raw_completed_at = parts

    try:
        # int() also takes signs, whitespace and "_" separators.
        if not (raw_id.isascii() and raw_id.isdigit()):
            raise ValueError(f"bad id: {raw_id!r}")
        task_id = int(raw_id)
        if task_id <= 0:
            raise ValueError(f"id must be positive: {task_id}")

        description = _decode_text(raw_desc)
        if not description.strip():
            raise ValueError("empty description")

        priority = Priority[raw_priority]

        if raw_completed not in _BOOL_TOKENS:
            raise ValueError(f"bad completed flag: {raw_completed!r}")
        completed = _BOOL_TOKENS[raw_completed]

        created_at = _parse_timestamp(raw_created)
        completed_at = None if raw_completed_at == NULL_TOKEN else _parse_timestamp(raw_completed_at)
    except (ValueError, KeyError, binascii.Error, UnicodeError) as e:
        return CorruptRecord(raw_line, str(e) or type(e).__name__)

    if completed != (completed_at is not None):
        return CorruptRecord(raw_line, "completed flag and completed_at disagree")
    if completed_at is not None and completed_at < created_at:
        return CorruptRecord(raw_line, "completed_at precedes created_at")

    return Task(
        id=task_id,
        description=description,
        priority=priority,
        created_at=created_at,
        completed=completed,
        completed_at=completed_at,
    )
