"""User stats summary.

Compact stats shown in the app shell: streak, today/yesterday activity and a
nudge message. The streak comes from the same function as the report's
``streakDays``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.time import day_before, format_date_key, get_current_time, local_date
from ..observability.loguru_config import log_timing
from .streak import DEFAULT_STREAK_MAX_DAYS, calculate_streak

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime, tzinfo

    from ..core.entries import TimeEntry

__all__ = [
    "UserStats",
    "contextual_message",
    "summarize_user_stats",
]

FIRST_ENTRY_MESSAGE = "Make your first time entry to start tracking your productivity journey!"
SECOND_ENTRY_MESSAGE = "Great start! Make another entry to build momentum and see your patterns emerge."
ACTIVE_TODAY_MESSAGE = "Excellent! You're being consistent today. Keep up the great work!"
ACTIVE_YESTERDAY_MESSAGE = "You were active yesterday! Make an entry today to maintain your momentum."
LAPSED_MESSAGE = "Get back on track! Make a time entry today to rebuild your momentum."


@dataclass(frozen=True)
class UserStats:
    """Summary of a user's logging activity.

    Attributes
    ----------
    streak : int
        Consecutive days with entries, ending today
    has_entries : bool
        Whether the user has any entry
    total_entries : int
        Number of entries
    last_entry_date : str | None
        Most recent local start date (YYYY-MM-DD)
    today_entries : int
        Entries starting today
    yesterday_entries : int
        Entries starting yesterday
    contextual_message : str
        Nudge message for the user
    show_red_dot : bool
        Whether to flag the entry button
    """

    streak: int
    has_entries: bool
    total_entries: int
    last_entry_date: str | None
    today_entries: int
    yesterday_entries: int
    contextual_message: str
    show_red_dot: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "streak": self.streak,
            "hasEntries": self.has_entries,
            "totalEntries": self.total_entries,
            "lastEntryDate": self.last_entry_date,
            "todayEntries": self.today_entries,
            "yesterdayEntries": self.yesterday_entries,
            "contextualMessage": self.contextual_message,
            "showRedDot": self.show_red_dot,
        }


def contextual_message(
    total_entries: int,
    today_entries: int,
    yesterday_entries: int,
    streak: int,
) -> tuple[str, bool]:
    """Pick the nudge message and red-dot flag.

    Rules are checked in order; the first match wins.

    Returns
    -------
    tuple[str, bool]
        (message, show_red_dot)
    """
    if total_entries == 0:
        return FIRST_ENTRY_MESSAGE, True
    if total_entries == 1:
        return SECOND_ENTRY_MESSAGE, today_entries == 0
    if today_entries > 0:
        return ACTIVE_TODAY_MESSAGE, False
    if yesterday_entries > 0:
        return ACTIVE_YESTERDAY_MESSAGE, True
    # Only reachable when streak and counts come from different days.
    if streak >= 7:
        return f"🎉 Congratulations on your {streak}-day streak! You're building amazing habits!", today_entries == 0
    if streak >= 3:
        return f"Great consistency! You're on a {streak}-day streak. Keep it going!", today_entries == 0
    return LAPSED_MESSAGE, True


@log_timing(component="analytics")
def summarize_user_stats(
    entries: Iterable[TimeEntry],
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
    max_days: int = DEFAULT_STREAK_MAX_DAYS,
) -> UserStats:
    """Summarize a user's entries (all time, not a reporting window).

    Parameters
    ----------
    entries
        All of the user's entries, any order
    now
        Instant treated as "now" (default: wall clock)
    tz
        Timezone for local dates
    max_days
        Upper bound on the streak walk

    Returns
    -------
    UserStats
        Summary
    """
    entries = list(entries)
    if now is None:
        now = get_current_time(tz)

    today = local_date(now, tz)
    yesterday = day_before(today)
    start_dates = [local_date(entry.start_time, tz) for entry in entries]

    today_entries = sum(1 for day in start_dates if day == today)
    yesterday_entries = sum(1 for day in start_dates if day == yesterday)
    streak = calculate_streak(entries, now, tz, max_days)

    message, show_red_dot = contextual_message(len(entries), today_entries, yesterday_entries, streak)

    return UserStats(
        streak=streak,
        has_entries=bool(entries),
        total_entries=len(entries),
        last_entry_date=format_date_key(max(start_dates)) if start_dates else None,
        today_entries=today_entries,
        yesterday_entries=yesterday_entries,
        contextual_message=message,
        show_red_dot=show_red_dot,
    )
