"""Analytics aggregation over time entries."""

from .aggregator import (
    DEFAULT_PRODUCTIVE_CATEGORIES,
    Aggregator,
    AnalyticsError,
    build_report_from_records,
    compute_analytics,
)
from .grouping import category_breakdown, category_by_date
from .productivity import calculate_productivity_score
from .report import (
    AnalyticsReport,
    CategoryDay,
    CategoryShare,
    CategoryTotal,
    HourTotal,
    MoodCount,
    WeekTotal,
    percentage,
    round_half_away,
)
from .schema import ANALYTICS_REPORT_SCHEMA, ReportValidator, get_report_schema, validate_report
from .streak import calculate_streak
from .time_windows import (
    PERIOD_DAYS,
    ReportingPeriod,
    compute_period_window,
    get_week_start,
    is_entry_in_window,
    period_days,
)
from .trends import mood_trends, peak_hours, weekly_comparison
from .user_stats import UserStats, summarize_user_stats

__all__ = [
    # Aggregation
    "DEFAULT_PRODUCTIVE_CATEGORIES",
    "Aggregator",
    "AnalyticsError",
    "build_report_from_records",
    "compute_analytics",
    # Metrics
    "calculate_productivity_score",
    "calculate_streak",
    "category_breakdown",
    "category_by_date",
    "mood_trends",
    "peak_hours",
    "weekly_comparison",
    # Report
    "AnalyticsReport",
    "CategoryDay",
    "CategoryShare",
    "CategoryTotal",
    "HourTotal",
    "MoodCount",
    "WeekTotal",
    "percentage",
    "round_half_away",
    # Schema
    "ANALYTICS_REPORT_SCHEMA",
    "ReportValidator",
    "get_report_schema",
    "validate_report",
    # Windows
    "PERIOD_DAYS",
    "ReportingPeriod",
    "compute_period_window",
    "get_week_start",
    "is_entry_in_window",
    "period_days",
    # User stats
    "UserStats",
    "summarize_user_stats",
]
