"""Time and timezone utilities for chronicle.

Provides consistent timezone handling for the analytics engine:
- Local day granularity in the user's timezone
- ISO-8601 parsing and UTC formatting
- Date keys and week labels used in reports
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

__all__ = [
    "MONTH_ABBREVIATIONS",
    "TimeConfig",
    "day_before",
    "ensure_timezone",
    "format_date_key",
    "format_utc_iso8601",
    "format_week_label",
    "get_current_time",
    "get_default_timezone",
    "local_date",
    "parse_datetime",
    "resolve_timezone",
    "set_default_timezone",
    "to_local",
]

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class TimeConfig:
    """Global time configuration."""

    _default_timezone = "UTC"

    @classmethod
    def get_default_timezone_name(cls) -> str:
        """Get default timezone name.

        Returns
        -------
        str
            Timezone name (e.g., "UTC", "Europe/Brussels")
        """
        return cls._default_timezone

    @classmethod
    def set_default_timezone_name(cls, timezone_name: str) -> None:
        """Set default timezone.

        Parameters
        ----------
        timezone_name
            IANA timezone name (e.g., "Europe/Brussels", "America/New_York")

        Raises
        ------
        ValueError
            If timezone is invalid
        """
        resolve_timezone(timezone_name)
        cls._default_timezone = timezone_name


def resolve_timezone(tz: tzinfo | str | None = None) -> tzinfo:
    """Turn a timezone name (or None for the default) into a tzinfo.

    Raises
    ------
    ValueError
        If the name is not a known IANA timezone
    """
    if tz is None:
        tz = TimeConfig.get_default_timezone_name()

    if isinstance(tz, str):
        try:
            return ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Invalid timezone: {tz}") from exc

    return tz


def get_default_timezone() -> tzinfo:
    """Get default timezone object."""
    return resolve_timezone(None)


def set_default_timezone(timezone_name: str) -> None:
    """Set default timezone for the process.

    Parameters
    ----------
    timezone_name
        IANA timezone name

    Raises
    ------
    ValueError
        If timezone is invalid
    """
    TimeConfig.set_default_timezone_name(timezone_name)


def get_current_time(tz: tzinfo | str | None = None) -> datetime:
    """Get current time in specified timezone.

    Parameters
    ----------
    tz
        Timezone (tzinfo, timezone name string, or None for default)

    Returns
    -------
    datetime
        Current time in specified timezone
    """
    return datetime.now(resolve_timezone(tz))


def ensure_timezone(dt: datetime, tz: tzinfo | str | None = None) -> datetime:
    """Ensure datetime has timezone information.

    Parameters
    ----------
    dt
        Datetime (may be naive)
    tz
        Timezone to assume if dt is naive (default: UTC)

    Returns
    -------
    datetime
        Timezone-aware datetime
    """
    if dt.tzinfo is not None:
        return dt

    if tz is None:
        tz_obj: tzinfo = timezone.utc
    else:
        tz_obj = resolve_timezone(tz)

    return dt.replace(tzinfo=tz_obj)


def to_local(dt: datetime, tz: tzinfo | str | None = None) -> datetime:
    """Convert a datetime to wall-clock time in ``tz``.

    Naive datetimes are taken as already being local to ``tz``.
    """
    tz_obj = resolve_timezone(tz)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz_obj)
    return dt.astimezone(tz_obj)


def local_date(dt: datetime, tz: tzinfo | str | None = None) -> date:
    """Calendar date of ``dt`` in ``tz``, time-of-day discarded."""
    return to_local(dt, tz).date()


def format_date_key(value: date | datetime) -> str:
    """Format a date as ``YYYY-MM-DD``.

    Lexicographic order of these keys is chronological order.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%Y-%m-%d")


def format_week_label(week_start: date | datetime) -> str:
    """Format a week start as an abbreviated English month and day.

    The month name does not follow the process locale.

    Example
    -------
    >>> format_week_label(date(2025, 10, 6))
    'Oct 6'
    """
    return f"{MONTH_ABBREVIATIONS[week_start.month - 1]} {week_start.day}"


def format_utc_iso8601(dt: datetime) -> str:
    """Format datetime as ISO-8601 UTC string.

    Naive datetimes are assumed to be UTC.

    Example
    -------
    >>> dt = datetime(2025, 10, 8, 12, 30, 0, tzinfo=timezone.utc)
    >>> format_utc_iso8601(dt)
    '2025-10-08T12:30:00+00:00'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt.isoformat()


def parse_datetime(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp.

    Supports the ``Z`` suffix used by JSON APIs (2025-01-15T14:30:00Z).
    Offsets are preserved; naive strings stay naive.

    Raises
    ------
    ValueError
        If parsing fails
    """
    if isinstance(value, datetime):
        return value

    if not isinstance(value, str):
        raise ValueError(f"Cannot parse datetime: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"Cannot parse datetime: {value}") from exc


def day_before(value: date) -> date:
    return value - timedelta(days=1)
