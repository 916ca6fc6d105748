"""Shared pytest fixtures for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any, Callable

import pytest

from chronicle.core.entries import TimeEntry

# Wednesday, Oct 8, 2025, 18:00 UTC
FIXED_NOW = datetime(2025, 10, 8, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Reference instant used as "now" across tests."""
    return FIXED_NOW


@pytest.fixture
def make_entry() -> Callable[..., TimeEntry]:
    """Factory for entries with sensible defaults."""
    ids = count(1)

    def _make(
        start_time: datetime = FIXED_NOW,
        duration: int = 30,
        category: str = "work",
        activity: str = "Coding",
        mood: str | None = None,
        **extra: Any,
    ) -> TimeEntry:
        return TimeEntry(
            id=extra.pop("id", f"entry-{next(ids)}"),
            user_id=extra.pop("user_id", "user-1"),
            activity=activity,
            category=category,
            duration=duration,
            start_time=start_time,
            end_time=extra.pop("end_time", start_time + timedelta(minutes=duration)),
            mood=mood,
            **extra,
        )

    return _make
