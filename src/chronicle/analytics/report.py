"""Analytics report model.

The report is serialized with the exact camelCase keys the UI binds to.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "AnalyticsReport",
    "CategoryDay",
    "CategoryShare",
    "CategoryTotal",
    "HourTotal",
    "MoodCount",
    "WeekTotal",
    "percentage",
    "round_half_away",
]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Python's ``round`` rounds halves to even, which would turn 2.5 into 2.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def percentage(part: float, total: float) -> int:
    """Integer share of ``part`` in ``total``; 0 when ``total`` is 0."""
    if total == 0:
        return 0
    return round_half_away(part / total * 100)


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    duration: int
    activities: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "duration": self.duration,
            "activities": list(self.activities),
        }


@dataclass(frozen=True)
class CategoryDay:
    date: str
    categories: tuple[CategoryTotal, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "categories": [category.to_dict() for category in self.categories],
        }


@dataclass(frozen=True)
class MoodCount:
    mood: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"mood": self.mood, "count": self.count}


@dataclass(frozen=True)
class HourTotal:
    hour: int
    duration: int

    def to_dict(self) -> dict[str, Any]:
        return {"hour": self.hour, "duration": self.duration}


@dataclass(frozen=True)
class WeekTotal:
    week: str
    duration: int

    def to_dict(self) -> dict[str, Any]:
        return {"week": self.week, "duration": self.duration}


@dataclass(frozen=True)
class CategoryShare:
    category: str
    duration: int
    percentage: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "duration": self.duration,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class AnalyticsReport:
    """Derived statistics for one user's entries in a reporting window.

    Attributes
    ----------
    total_time_tracked : int
        Sum of all entry durations (minutes)
    total_entries : int
        Number of entries
    streak_days : int
        Consecutive days with entries, ending today
    productivity_score : int
        Share (0-100) of tracked time in productive categories
    category_by_date : tuple[CategoryDay, ...]
        Per-date category totals, ascending by date
    mood_trends : tuple[MoodCount, ...]
        Occurrences per mood, first-occurrence order
    peak_hours : tuple[HourTotal, ...]
        Duration per local hour-of-day, only hours with entries
    weekly_comparison : tuple[WeekTotal, ...]
        Duration for the most recent week buckets, oldest first
    category_breakdown : tuple[CategoryShare, ...]
        Duration and share per category, descending by duration
    """

    total_time_tracked: int = 0
    total_entries: int = 0
    streak_days: int = 0
    productivity_score: int = 0
    category_by_date: tuple[CategoryDay, ...] = field(default_factory=tuple)
    mood_trends: tuple[MoodCount, ...] = field(default_factory=tuple)
    peak_hours: tuple[HourTotal, ...] = field(default_factory=tuple)
    weekly_comparison: tuple[WeekTotal, ...] = field(default_factory=tuple)
    category_breakdown: tuple[CategoryShare, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-serializable wire shape."""
        return {
            "totalTimeTracked": self.total_time_tracked,
            "totalEntries": self.total_entries,
            "streakDays": self.streak_days,
            "productivityScore": self.productivity_score,
            "categoryByDate": [day.to_dict() for day in self.category_by_date],
            "moodTrends": [mood.to_dict() for mood in self.mood_trends],
            "peakHours": [hour.to_dict() for hour in self.peak_hours],
            "weeklyComparison": [week.to_dict() for week in self.weekly_comparison],
            "categoryBreakdown": [share.to_dict() for share in self.category_breakdown],
        }

    def to_json(self) -> str:
        """Convert to JSON string.

        Returns
        -------
        str
            JSON representation
        """
        return json.dumps(self.to_dict(), ensure_ascii=False)
