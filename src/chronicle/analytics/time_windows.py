"""Reporting windows with DST awareness.

Turn a reporting period ("7d", "30d", "90d", "1y") into the UTC boundaries the
caller uses to fetch entries. The aggregator never filters by date itself.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Literal, TypeVar

import pytz

from ..core.time import format_utc_iso8601, get_current_time, parse_datetime

if TYPE_CHECKING:
    from ..core.entries import TimeEntry

__all__ = [
    "PERIOD_DAYS",
    "ReportingPeriod",
    "compute_period_window",
    "get_week_start",
    "is_entry_in_window",
    "period_days",
]

ReportingPeriod = Literal["7d", "30d", "90d", "1y"]

PERIOD_DAYS: dict[str, int] = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "1y": 365,
}

DEFAULT_PERIOD: ReportingPeriod = "30d"

D = TypeVar("D", date, datetime)


def period_days(period: str | None) -> int:
    """Number of days a reporting period looks back.

    Unknown or missing periods fall back to 30 days.
    """
    return PERIOD_DAYS.get(period or DEFAULT_PERIOD, PERIOD_DAYS[DEFAULT_PERIOD])


def get_week_start(value: D, start_on: int = 0) -> D:
    """Get start of week for a date or datetime.

    Parameters
    ----------
    value
        Date or datetime to get week start for
    start_on
        Day of week to start on (0=Monday, 6=Sunday)

    Returns
    -------
    date | datetime
        Start of week (same type, and same time of day, as input)
    """
    days_since_start = (value.weekday() - start_on) % 7
    return value - timedelta(days=days_since_start)


def compute_period_window(
    now: datetime | None = None,
    period: str | None = DEFAULT_PERIOD,
    timezone_str: str = "UTC",
) -> tuple[str, str]:
    """Compute UTC boundaries for a reporting period.

    The window starts at local midnight ``period_days`` days before ``now``
    and ends at the last microsecond of ``now``'s local day. A local day may
    be 23, 24 or 25 hours long in UTC around DST transitions.

    Parameters
    ----------
    now
        Reference instant (default: current time in ``timezone_str``)
    period
        Reporting period ("7d", "30d", "90d", "1y")
    timezone_str
        Timezone name (e.g., "America/New_York")

    Returns
    -------
    tuple[str, str]
        (start_utc, end_utc) as ISO-8601 strings, both inclusive

    Examples
    --------
    >>> start, end = compute_period_window(
    ...     datetime(2025, 10, 8, 15, 0, tzinfo=pytz.UTC),
    ...     "7d",
    ...     "America/New_York",
    ... )
    >>> start
    '2025-10-01T04:00:00+00:00'
    >>> end
    '2025-10-09T03:59:59.999999+00:00'
    """
    tz = pytz.timezone(timezone_str)

    if now is None:
        now = get_current_time(timezone_str)
    if now.tzinfo is None:
        local_now = tz.localize(now)
    else:
        local_now = now.astimezone(tz)

    today = local_now.date()
    first_day = today - timedelta(days=period_days(period))
    next_day = today + timedelta(days=1)

    local_start = tz.localize(datetime(first_day.year, first_day.month, first_day.day))
    local_end = tz.localize(datetime(next_day.year, next_day.month, next_day.day))

    start_utc = local_start.astimezone(pytz.UTC)
    end_utc = local_end.astimezone(pytz.UTC) - timedelta(microseconds=1)

    return (
        format_utc_iso8601(start_utc),
        format_utc_iso8601(end_utc),
    )


def is_entry_in_window(
    entry: TimeEntry,
    start_utc: str | datetime,
    end_utc: str | datetime,
) -> bool:
    """Check if an entry's start time falls within ``[start, end]``.

    Parameters
    ----------
    entry
        Entry to check
    start_utc
        Window start (ISO-8601 string or datetime)
    end_utc
        Window end (ISO-8601 string or datetime)

    Returns
    -------
    bool
        True if entry is in window. Naive bounds and start times are read as UTC.
    """
    start_dt, end_dt, entry_ts = (
        _as_utc(parse_datetime(value)) for value in (start_utc, end_utc, entry.start_time)
    )
    return start_dt <= entry_ts <= end_dt


def _as_utc(dt: datetime) -> datetime:
    return pytz.UTC.localize(dt) if dt.tzinfo is None else dt
