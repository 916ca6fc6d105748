"""Core components of chronicle: entry model and time utilities."""

from .entries import DEFAULT_CATEGORY, InvalidEntryError, TimeEntry, coerce_entries
from .time import (
    TimeConfig,
    ensure_timezone,
    format_date_key,
    format_utc_iso8601,
    format_week_label,
    get_current_time,
    get_default_timezone,
    local_date,
    parse_datetime,
    resolve_timezone,
    set_default_timezone,
    to_local,
)

__all__ = [
    # Entries
    "DEFAULT_CATEGORY",
    "InvalidEntryError",
    "TimeEntry",
    "coerce_entries",
    # Time
    "TimeConfig",
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
