"""chronicle: analytics aggregation for personal time logs."""

from .analytics import (
    Aggregator,
    AnalyticsError,
    AnalyticsReport,
    UserStats,
    build_report_from_records,
    compute_analytics,
    summarize_user_stats,
)
from .core import InvalidEntryError, TimeEntry

__version__ = "0.1.0"

__all__ = [
    "Aggregator",
    "AnalyticsError",
    "AnalyticsReport",
    "InvalidEntryError",
    "TimeEntry",
    "UserStats",
    "__version__",
    "build_report_from_records",
    "compute_analytics",
    "summarize_user_stats",
]
