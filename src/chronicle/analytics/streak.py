"""Streak computation.

A streak is the number of consecutive local calendar days, counting today,
with at least one entry. A day without entries today means a streak of 0,
however long the run that ended yesterday. The report and the user stats both
read their streak from here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.time import day_before, get_current_time, local_date

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date, datetime, tzinfo

    from ..core.entries import TimeEntry

__all__ = [
    "DEFAULT_STREAK_MAX_DAYS",
    "active_dates",
    "calculate_streak",
]

DEFAULT_STREAK_MAX_DAYS = 365


def active_dates(entries: Iterable[TimeEntry], tz: tzinfo | str | None = None) -> set[date]:
    """Distinct local dates on which some entry starts."""
    return {local_date(entry.start_time, tz) for entry in entries}


def calculate_streak(
    entries: Iterable[TimeEntry],
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
    max_days: int = DEFAULT_STREAK_MAX_DAYS,
) -> int:
    """Count consecutive days with entries, walking back from today.

    Parameters
    ----------
    entries
        Entries in any order
    now
        Reference instant; its local date is "today" (default: wall clock)
    tz
        Timezone for local dates
    max_days
        Upper bound on the walk

    Returns
    -------
    int
        Streak length in days, 0 if today has no entry
    """
    dates = active_dates(entries, tz)
    if not dates:
        return 0

    current = local_date(now if now is not None else get_current_time(tz), tz)

    streak = 0
    for _ in range(max_days):
        if current not in dates:
            break
        streak += 1
        current = day_before(current)

    return streak
