"""Mood, peak-hour and weekly trends."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from ..core.time import format_week_label, local_date, to_local
from .report import HourTotal, MoodCount, WeekTotal
from .time_windows import get_week_start

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date, tzinfo

    from ..core.entries import TimeEntry

__all__ = [
    "DEFAULT_WEEKLY_WEEKS",
    "mood_trends",
    "peak_hours",
    "weekly_comparison",
]

DEFAULT_WEEKLY_WEEKS = 4


def mood_trends(entries: Sequence[TimeEntry]) -> tuple[MoodCount, ...]:
    """Count entries per mood.

    Entries without a mood are skipped. Moods appear in the order they were
    first seen.
    """
    counts: dict[str, int] = defaultdict(int)
    for entry in entries:
        if entry.has_mood:
            counts[entry.mood] += 1

    return tuple(MoodCount(mood=mood, count=count) for mood, count in counts.items())


def peak_hours(
    entries: Sequence[TimeEntry],
    tz: tzinfo | str | None = None,
) -> tuple[HourTotal, ...]:
    """Total duration per local hour-of-day of the entry start.

    Only hours with at least one entry are returned, ascending by hour.
    """
    totals: dict[int, int] = defaultdict(int)
    for entry in entries:
        totals[to_local(entry.start_time, tz).hour] += entry.duration

    return tuple(HourTotal(hour=hour, duration=totals[hour]) for hour in sorted(totals))


def weekly_comparison(
    entries: Sequence[TimeEntry],
    tz: tzinfo | str | None = None,
    weeks: int = DEFAULT_WEEKLY_WEEKS,
    week_start_on: int = 0,
) -> tuple[WeekTotal, ...]:
    """Total duration for the most recent week buckets.

    Entries are bucketed by the start of their local week (Monday by
    default). Only weeks holding entries exist; skipped weeks are not filled
    with zeros. The last ``weeks`` buckets are returned oldest first.

    Parameters
    ----------
    entries
        Entries to group
    tz
        Timezone for local dates
    weeks
        Maximum number of buckets to return
    week_start_on
        Day of week to start on (0=Monday, 6=Sunday)

    Returns
    -------
    tuple[WeekTotal, ...]
        Buckets labelled like "Oct 6"
    """
    totals: dict[date, int] = defaultdict(int)
    for entry in entries:
        week_start = get_week_start(local_date(entry.start_time, tz), start_on=week_start_on)
        totals[week_start] += entry.duration

    recent = sorted(totals)[-weeks:] if weeks > 0 else []
    return tuple(WeekTotal(week=format_week_label(start), duration=totals[start]) for start in recent)
