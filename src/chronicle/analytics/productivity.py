"""Productivity score."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .report import percentage

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from ..core.entries import TimeEntry

__all__ = [
    "calculate_productivity_score",
    "productive_duration",
]


def productive_duration(entries: Sequence[TimeEntry], productive_categories: Collection[str]) -> int:
    """Total minutes spent in ``productive_categories``."""
    return sum(entry.duration for entry in entries if entry.category in productive_categories)


def calculate_productivity_score(entries: Sequence[TimeEntry], productive_categories: Collection[str]) -> int:
    """Share of tracked time spent in productive categories.

    The ratio is taken against the total duration of all entries and rounded
    half away from zero. No entries, or zero total duration, score 0.

    Parameters
    ----------
    entries
        Entries to score
    productive_categories
        Category names counted as productive (e.g. ``{"work", "education"}``)

    Returns
    -------
    int
        Score, 0-100 for well-formed input
    """
    total = sum(entry.duration for entry in entries)
    return percentage(productive_duration(entries, productive_categories), total)
