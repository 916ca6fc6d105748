"""Analytics aggregation.

Turn one user's entries for a reporting window into an ``AnalyticsReport``.
The caller fetches and filters entries; aggregation does no I/O and keeps no
state between calls, so one ``Aggregator`` can serve concurrent requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..core.entries import InvalidEntryError, coerce_entries
from ..core.time import get_current_time, resolve_timezone
from ..observability.loguru_config import get_logger, timing_context
from .grouping import category_breakdown, category_by_date
from .productivity import calculate_productivity_score
from .report import AnalyticsReport
from .streak import DEFAULT_STREAK_MAX_DAYS, calculate_streak
from .trends import DEFAULT_WEEKLY_WEEKS, mood_trends, peak_hours, weekly_comparison

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping
    from datetime import datetime

    from ..config.settings import Settings
    from ..core.entries import TimeEntry

__all__ = [
    "DEFAULT_PRODUCTIVE_CATEGORIES",
    "AnalyticsError",
    "Aggregator",
    "build_report_from_records",
    "compute_analytics",
]

DEFAULT_PRODUCTIVE_CATEGORIES: frozenset[str] = frozenset({"work", "education"})

log = get_logger("analytics")


class AnalyticsError(Exception):
    """Raised when analytics cannot be computed from the supplied records."""


class Aggregator:
    """Computes analytics reports.

    Parameters
    ----------
    productive_categories
        Categories counted as productive time
    timezone
        IANA timezone (or tzinfo) for local dates and hours
    streak_max_days
        Upper bound on the streak walk
    weekly_weeks
        Number of most recent week buckets in the weekly comparison
    week_start_on
        Day weeks start on (0=Monday, 6=Sunday)

    Example
    -------
    >>> aggregator = Aggregator(productive_categories={"work", "study"}, timezone="Europe/Brussels")
    >>> report = aggregator.compute(entries, now=now)
    >>> report.to_dict()["streakDays"]
    3
    """

    def __init__(
        self,
        productive_categories: Collection[str] = DEFAULT_PRODUCTIVE_CATEGORIES,
        timezone: Any = "UTC",
        streak_max_days: int = DEFAULT_STREAK_MAX_DAYS,
        weekly_weeks: int = DEFAULT_WEEKLY_WEEKS,
        week_start_on: int = 0,
    ) -> None:
        self.productive_categories = frozenset(productive_categories)
        self.timezone = resolve_timezone(timezone)
        self.streak_max_days = streak_max_days
        self.weekly_weeks = weekly_weeks
        self.week_start_on = week_start_on

    @classmethod
    def from_settings(cls, settings: Settings) -> Aggregator:
        """Create an aggregator from loaded settings."""
        return cls(
            productive_categories=settings.productive_categories,
            timezone=settings.timezone,
            streak_max_days=settings.streak_max_days,
            weekly_weeks=settings.weekly_weeks,
            week_start_on=settings.week_start_on,
        )

    def compute(self, entries: Iterable[TimeEntry], now: datetime | None = None) -> AnalyticsReport:
        """Compute the analytics report.

        Parameters
        ----------
        entries
            One user's entries, already filtered to the reporting window
        now
            Instant treated as "now" (default: current time)

        Returns
        -------
        AnalyticsReport
            Report; every metric is zero or empty for no entries
        """
        entries = list(entries)
        if now is None:
            now = get_current_time(self.timezone)

        with timing_context("compute_report", component="analytics", entries=len(entries)) as ctx:
            report = AnalyticsReport(
                total_time_tracked=sum(entry.duration for entry in entries),
                total_entries=len(entries),
                streak_days=calculate_streak(entries, now, self.timezone, self.streak_max_days),
                productivity_score=calculate_productivity_score(entries, self.productive_categories),
                category_by_date=category_by_date(entries, self.timezone),
                mood_trends=mood_trends(entries),
                peak_hours=peak_hours(entries, self.timezone),
                weekly_comparison=weekly_comparison(
                    entries,
                    self.timezone,
                    weeks=self.weekly_weeks,
                    week_start_on=self.week_start_on,
                ),
                category_breakdown=category_breakdown(entries),
            )
            ctx["streak_days"] = report.streak_days
            ctx["total_time_tracked"] = report.total_time_tracked

        return report


def compute_analytics(
    entries: Iterable[TimeEntry],
    now: datetime | None = None,
    **options: Any,
) -> AnalyticsReport:
    """Compute a report with a one-off ``Aggregator``.

    ``options`` are passed to ``Aggregator``.
    """
    return Aggregator(**options).compute(entries, now=now)


def build_report_from_records(
    records: Iterable[Mapping[str, Any] | TimeEntry],
    now: datetime | None = None,
    aggregator: Aggregator | None = None,
) -> AnalyticsReport:
    """Coerce raw store records and compute the report.

    Parameters
    ----------
    records
        Raw rows as returned by the store, or ``TimeEntry`` instances
    now
        Instant treated as "now"
    aggregator
        Aggregator to use (default: one with default settings)

    Returns
    -------
    AnalyticsReport
        Computed report

    Raises
    ------
    AnalyticsError
        If a record cannot be coerced to an entry
    """
    try:
        entries = coerce_entries(records)
    except InvalidEntryError as exc:
        log.error("Failed to compute analytics: {}", exc)
        raise AnalyticsError("Failed to compute analytics") from exc

    return (aggregator or Aggregator()).compute(entries, now=now)
