# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta


class FakeClock:
    """
    Deterministic clock for TaskStore tests.

    Each call returns a time one minute after the previous one, so tasks
    created in sequence always have distinct, increasing created_at values.
    """

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start or datetime(2026, 1, 1, 9, 0, 0)
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        self.calls += 1
        return now
