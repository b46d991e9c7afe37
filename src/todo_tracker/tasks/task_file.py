# src/todo_tracker/tasks/task_file.py

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from .task_codec import CorruptRecord, decode_task, encode_task
from .task_models import Task

logger = logging.getLogger(__name__)


def load_tasks(path: str | Path) -> list[Task]:
    """
    Load tasks from a flat file, best-effort.

    - Missing file -> [] (fresh store).
    - Blank lines are ignored.
    - Lines that fail to decode (including invalid UTF-8) are dropped; so is
      a line repeating an id that was already loaded.
    - An unreadable file degrades to [] with a warning.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No task file at %s, starting with an empty list.", path)
        return []

    try:
        raw_lines = path.read_bytes().splitlines()
    except OSError:
        logger.warning("Could not read %s. Starting fresh.", path, exc_info=True)
        return []

    tasks: list[Task] = []
    seen_ids: set[int] = set()
    skipped = 0

    for lineno, raw in enumerate(raw_lines, start=1):
        # Decode per line so one bad byte sequence costs only its own record.
        try:
            line = raw.decode("utf-8")
        except UnicodeDecodeError:
            skipped += 1
            logger.debug("Skipping non UTF-8 line %s:%d", path, lineno)
            continue
        if not line.strip():
            continue
        result = decode_task(line)
        if isinstance(result, CorruptRecord):
            skipped += 1
            logger.debug("Skipping corrupt record %s:%d (%s)", path, lineno, result.reason)
            continue
        if result.id in seen_ids:
            skipped += 1
            logger.debug("Skipping duplicate id=%s at %s:%d", result.id, path, lineno)
            continue
        seen_ids.add(result.id)
        tasks.append(result)

    if skipped:
        logger.warning("Skipped %d unreadable line(s) in %s", skipped, path)
    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return tasks


def save_tasks(path: str | Path, tasks: Iterable[Task]) -> bool:
    """
    Rewrite the whole file with `tasks`.

    Writes a sibling temp file and swaps it in with os.replace, so readers see
    either the previous content or the new one. Returns False (and logs a
    warning) on I/O failure; the caller keeps its in-memory state.
    """
    path = Path(path)
    payload = "".join(encode_task(t) + "\n" for t in tasks)
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8", newline="\n") as f:
            f.write(payload)
        os.replace(tmp, path)
    except OSError:
        logger.warning("Could not save tasks to %s", path, exc_info=True)
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.debug("Failed to remove temp file %s", tmp, exc_info=True)
        return False
    return True
