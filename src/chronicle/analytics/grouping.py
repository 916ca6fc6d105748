"""Per-date and per-category grouping."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from ..core.time import format_date_key, local_date
from .report import CategoryDay, CategoryShare, CategoryTotal, percentage

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import tzinfo

    from ..core.entries import TimeEntry

__all__ = [
    "CategoryBucket",
    "category_breakdown",
    "category_by_date",
]


class CategoryBucket:
    """Accumulated duration and activity labels for one category."""

    def __init__(self, category: str) -> None:
        self.category = category
        self.duration = 0
        self.activities: list[str] = []

    def add_entry(self, entry: TimeEntry) -> None:
        """Add entry to bucket."""
        self.duration += entry.duration
        self.activities.append(entry.activity)

    def to_total(self) -> CategoryTotal:
        return CategoryTotal(
            category=self.category,
            duration=self.duration,
            activities=tuple(self.activities),
        )


def category_by_date(
    entries: Sequence[TimeEntry],
    tz: tzinfo | str | None = None,
) -> tuple[CategoryDay, ...]:
    """Group entries by local start date, then by category.

    Categories within a date appear in first-occurrence order, and activity
    labels in the order the entries were supplied. Callers that care about
    activity order should pass entries sorted by start time.

    Parameters
    ----------
    entries
        Entries to group
    tz
        Timezone for local dates

    Returns
    -------
    tuple[CategoryDay, ...]
        One item per date, ascending by ``YYYY-MM-DD`` key
    """
    days: dict[str, dict[str, CategoryBucket]] = defaultdict(dict)

    for entry in entries:
        key = format_date_key(local_date(entry.start_time, tz))
        buckets = days[key]
        if entry.category not in buckets:
            buckets[entry.category] = CategoryBucket(entry.category)
        buckets[entry.category].add_entry(entry)

    return tuple(
        CategoryDay(
            date=key,
            categories=tuple(bucket.to_total() for bucket in days[key].values()),
        )
        for key in sorted(days)
    )


def category_breakdown(entries: Sequence[TimeEntry]) -> tuple[CategoryShare, ...]:
    """Total duration and share per category across all dates.

    Sorted by duration, largest first; ties keep first-occurrence order.
    Shares are rounded independently, so they can sum to 99 or 101.
    """
    totals: dict[str, int] = defaultdict(int)
    for entry in entries:
        totals[entry.category] += entry.duration

    grand_total = sum(totals.values())

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return tuple(
        CategoryShare(
            category=category,
            duration=duration,
            percentage=percentage(duration, grand_total),
        )
        for category, duration in ranked
    )
