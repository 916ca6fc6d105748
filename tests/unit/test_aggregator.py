"""Tests for the analytics aggregator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import pytest

from chronicle.analytics.aggregator import (
    Aggregator,
    AnalyticsError,
    build_report_from_records,
    compute_analytics,
)
from chronicle.analytics.report import AnalyticsReport
from chronicle.analytics.schema import validate_report
from chronicle.config.settings import Settings

DAY0 = datetime(2025, 10, 8, 9, 0, tzinfo=timezone.utc)

REPORT_KEYS = [
    "totalTimeTracked",
    "totalEntries",
    "streakDays",
    "productivityScore",
    "categoryByDate",
    "moodTrends",
    "peakHours",
    "weeklyComparison",
    "categoryBreakdown",
]


@pytest.fixture
def random_entries(make_entry, now):
    """Deterministic pseudo-random entries spread over ten weeks."""
    rng = random.Random(42)
    categories = ["work", "education", "health", "personal", "social"]
    moods = [None, "happy", "tired", "focused", "stressed"]

    return [
        make_entry(
            start_time=now - timedelta(minutes=rng.randrange(0, 70 * 24 * 60)),
            duration=rng.randrange(0, 240),
            category=rng.choice(categories),
            activity=f"Activity {i}",
            mood=rng.choice(moods),
        )
        for i in range(150)
    ]


class TestEmptyInput:
    def test_zero_values(self, now):
        report = Aggregator().compute([], now=now)

        assert report == AnalyticsReport()
        assert report.to_dict() == {
            "totalTimeTracked": 0,
            "totalEntries": 0,
            "streakDays": 0,
            "productivityScore": 0,
            "categoryByDate": [],
            "moodTrends": [],
            "peakHours": [],
            "weeklyComparison": [],
            "categoryBreakdown": [],
        }

    def test_without_now(self):
        assert Aggregator().compute([]).total_entries == 0


class TestScenarios:
    def test_work_and_personal(self, make_entry, now):
        entries = [
            make_entry(category="work", duration=60, start_time=DAY0, activity="Coding"),
            make_entry(category="personal", duration=30, start_time=DAY0.replace(hour=10, minute=30), activity="Errands"),
        ]

        report = Aggregator().compute(entries, now=now).to_dict()

        assert report["totalTimeTracked"] == 90
        assert report["totalEntries"] == 2
        assert report["productivityScore"] == 67
        assert report["streakDays"] == 1
        assert report["categoryBreakdown"] == [
            {"category": "work", "duration": 60, "percentage": 67},
            {"category": "personal", "duration": 30, "percentage": 33},
        ]
        assert report["categoryByDate"] == [
            {
                "date": "2025-10-08",
                "categories": [
                    {"category": "work", "duration": 60, "activities": ["Coding"]},
                    {"category": "personal", "duration": 30, "activities": ["Errands"]},
                ],
            }
        ]
        assert report["peakHours"] == [{"hour": 9, "duration": 60}, {"hour": 10, "duration": 30}]
        assert report["weeklyComparison"] == [{"week": "Oct 6", "duration": 90}]
        assert report["moodTrends"] == []

    def test_single_entry_lands_in_one_bucket_each(self, make_entry, now):
        entry = make_entry(category="health", duration=25, start_time=DAY0, mood="calm", activity="Walk")

        report = Aggregator().compute([entry], now=now).to_dict()

        assert report["categoryByDate"] == [
            {"date": "2025-10-08", "categories": [{"category": "health", "duration": 25, "activities": ["Walk"]}]}
        ]
        assert report["moodTrends"] == [{"mood": "calm", "count": 1}]
        assert report["peakHours"] == [{"hour": 9, "duration": 25}]
        assert report["weeklyComparison"] == [{"week": "Oct 6", "duration": 25}]
        assert report["categoryBreakdown"] == [{"category": "health", "duration": 25, "percentage": 100}]
        assert report["productivityScore"] == 0
        assert report["streakDays"] == 1

    def test_streak_zero_when_today_missing(self, make_entry, now):
        """Intentional boundary: yesterday's run does not count without today."""
        entries = [make_entry(start_time=DAY0 - timedelta(days=d)) for d in (1, 2)]

        assert Aggregator().compute(entries, now=now).streak_days == 0

    def test_all_productive(self, make_entry, now):
        entries = [make_entry(category="work"), make_entry(category="education")]

        assert Aggregator().compute(entries, now=now).productivity_score == 100

    def test_custom_productive_categories(self, make_entry, now):
        entries = [make_entry(category="reading", duration=30), make_entry(category="work", duration=30)]

        report = Aggregator(productive_categories={"reading"}).compute(entries, now=now)

        assert report.productivity_score == 50

    def test_timezone_moves_buckets(self, make_entry):
        entry = make_entry(start_time=datetime(2025, 10, 8, 23, 30, tzinfo=timezone.utc))
        now = datetime(2025, 10, 9, 8, 0, tzinfo=timezone.utc)

        utc = Aggregator(timezone="UTC").compute([entry], now=now)
        tokyo = Aggregator(timezone="Asia/Tokyo").compute([entry], now=now)

        assert utc.category_by_date[0].date == "2025-10-08"
        assert utc.peak_hours[0].hour == 23
        assert utc.streak_days == 0
        assert tokyo.category_by_date[0].date == "2025-10-09"
        assert tokyo.peak_hours[0].hour == 8
        assert tokyo.streak_days == 1

    def test_malformed_values_flow_through(self, make_entry, now):
        entries = [
            make_entry(duration=-30, category="work"),
            make_entry(duration=90, category="health", end_time=DAY0 - timedelta(hours=5)),
        ]

        report = Aggregator().compute(entries, now=now)

        assert report.total_time_tracked == 60
        assert report.productivity_score == -50


class TestProperties:
    def test_totals(self, random_entries, now):
        report = Aggregator().compute(random_entries, now=now)

        assert report.total_time_tracked == sum(e.duration for e in random_entries)
        assert report.total_entries == len(random_entries)

    def test_breakdown_sums(self, random_entries, now):
        report = Aggregator().compute(random_entries, now=now)

        assert sum(s.duration for s in report.category_breakdown) == report.total_time_tracked
        percentages = sum(s.percentage for s in report.category_breakdown)
        assert abs(percentages - 100) <= len(report.category_breakdown)

    def test_category_by_date_sums(self, random_entries, now):
        report = Aggregator().compute(random_entries, now=now)

        total = sum(c.duration for day in report.category_by_date for c in day.categories)
        activities = sum(len(c.activities) for day in report.category_by_date for c in day.categories)
        assert total == report.total_time_tracked
        assert activities == report.total_entries

    def test_peak_hours_sum(self, random_entries, now):
        report = Aggregator().compute(random_entries, now=now)

        assert sum(h.duration for h in report.peak_hours) == report.total_time_tracked
        assert all(0 <= h.hour <= 23 for h in report.peak_hours)

    def test_weekly_window(self, random_entries, make_entry, now):
        report = Aggregator().compute([*random_entries, make_entry(start_time=now)], now=now)

        assert len(report.weekly_comparison) == 4
        assert report.weekly_comparison[-1].week == "Oct 6"

    def test_mood_counts(self, random_entries, now):
        report = Aggregator().compute(random_entries, now=now)

        assert sum(m.count for m in report.mood_trends) == sum(1 for e in random_entries if e.mood)

    def test_idempotent(self, random_entries, now):
        aggregator = Aggregator(timezone="America/New_York")

        first = aggregator.compute(random_entries, now=now).to_json()
        second = aggregator.compute(random_entries, now=now).to_json()

        assert first == second

    def test_report_matches_schema(self, random_entries, now):
        data = Aggregator().compute(random_entries, now=now).to_dict()

        assert list(data) == REPORT_KEYS
        assert validate_report(data)

    def test_accepts_generators(self, random_entries, now):
        report = Aggregator().compute((e for e in random_entries), now=now)

        assert report.total_entries == len(random_entries)


def test_from_settings(make_entry, now):
    settings = Settings(
        timezone="Asia/Tokyo",
        productive_categories="health",
        weekly_weeks=2,
        week_start_on=6,
        streak_max_days=30,
    )

    aggregator = Aggregator.from_settings(settings)

    assert aggregator.productive_categories == {"health"}
    assert str(aggregator.timezone) == "Asia/Tokyo"
    assert aggregator.weekly_weeks == 2
    assert aggregator.week_start_on == 6
    assert aggregator.streak_max_days == 30
    assert aggregator.compute([make_entry(category="health")], now=now).productivity_score == 100


def test_invalid_timezone():
    with pytest.raises(ValueError, match="Invalid timezone"):
        Aggregator(timezone="Nowhere/Special")


def test_compute_analytics(make_entry, now):
    report = compute_analytics([make_entry(category="study")], now=now, productive_categories={"study"})

    assert report.productivity_score == 100


class TestBuildReportFromRecords:
    def test_raw_records(self, now):
        records = [
            {
                "_id": "a1",
                "userId": "u1",
                "activity": "Coding",
                "category": "work",
                "duration": 60,
                "startTime": "2025-10-08T09:00:00Z",
                "endTime": "2025-10-08T10:00:00Z",
            },
            {
                "_id": "a2",
                "userId": "u1",
                "activity": "Errands",
                "category": "personal",
                "duration": 30,
                "startTime": "2025-10-08T10:30:00Z",
                "endTime": "2025-10-08T11:00:00Z",
                "mood": "happy",
            },
        ]

        report = build_report_from_records(records, now=now)

        assert report.total_time_tracked == 90
        assert report.productivity_score == 67
        assert report.mood_trends[0].mood == "happy"

    def test_uses_given_aggregator(self, make_entry, now):
        aggregator = Aggregator(productive_categories={"personal"})

        report = build_report_from_records([make_entry(category="personal")], now=now, aggregator=aggregator)

        assert report.productivity_score == 100

    def test_bad_record_raises_analytics_error(self, now):
        with pytest.raises(AnalyticsError, match="Failed to compute analytics") as exc_info:
            build_report_from_records([{"_id": "x", "duration": 10}], now=now)

        assert isinstance(exc_info.value.__cause__, ValueError)
