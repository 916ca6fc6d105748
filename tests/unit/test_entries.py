"""Tests for entry coercion from raw store records."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from chronicle.core.entries import DEFAULT_CATEGORY, InvalidEntryError, TimeEntry, coerce_entries


def _record(**overrides):
    record = {
        "_id": "665f1c2e",
        "userId": "user-1",
        "activity": "Deep work",
        "category": "work",
        "duration": 90,
        "startTime": "2025-10-08T09:00:00.000Z",
        "endTime": "2025-10-08T10:30:00.000Z",
        "mood": "focused",
        "tags": "writing, planning",
    }
    record.update(overrides)
    return record


class TestFromDict:
    def test_camel_case_record(self):
        entry = TimeEntry.from_dict(_record())

        assert entry.id == "665f1c2e"
        assert entry.user_id == "user-1"
        assert entry.activity == "Deep work"
        assert entry.category == "work"
        assert entry.duration == 90
        assert entry.start_time == datetime(2025, 10, 8, 9, 0, tzinfo=timezone.utc)
        assert entry.end_time == datetime(2025, 10, 8, 10, 30, tzinfo=timezone.utc)
        assert entry.mood == "focused"
        assert entry.tags == ("writing", "planning")

    def test_snake_case_record(self):
        entry = TimeEntry.from_dict(
            {
                "id": "e1",
                "user_id": "u1",
                "activity": "Run",
                "category": "health",
                "duration": "45",
                "start_time": datetime(2025, 10, 8, 7, 0),
            }
        )

        assert entry.id == "e1"
        assert entry.duration == 45
        assert entry.end_time == entry.start_time
        assert entry.mood is None
        assert entry.tags == ()

    def test_missing_category_defaults_to_general(self):
        record = _record()
        del record["category"]

        assert TimeEntry.from_dict(record).category == DEFAULT_CATEGORY == "general"

    def test_empty_mood_is_none(self):
        entry = TimeEntry.from_dict(_record(mood=""))

        assert entry.mood is None
        assert not entry.has_mood

    def test_tags_list(self):
        assert TimeEntry.from_dict(_record(tags=["a", "b"])).tags == ("a", "b")

    def test_negative_duration_accepted(self):
        """Input invariants are the caller's job; values flow through as given."""
        assert TimeEntry.from_dict(_record(duration=-15)).duration == -15

    def test_inverted_interval_accepted(self):
        entry = TimeEntry.from_dict(_record(endTime="2025-10-08T08:00:00Z"))

        assert entry.end_time < entry.start_time

    def test_missing_start_time(self):
        record = _record()
        del record["startTime"]

        with pytest.raises(InvalidEntryError, match="no startTime"):
            TimeEntry.from_dict(record)

    def test_unparseable_start_time(self):
        with pytest.raises(InvalidEntryError):
            TimeEntry.from_dict(_record(startTime="not a date"))

    @pytest.mark.parametrize("duration", ["ninety", True, [1], 30.7, "30.5"])
    def test_invalid_duration(self, duration):
        with pytest.raises(InvalidEntryError):
            TimeEntry.from_dict(_record(duration=duration))

    def test_null_duration_is_zero(self):
        assert TimeEntry.from_dict(_record(duration=None)).duration == 0

    def test_invalid_entry_error_is_value_error(self):
        assert issubclass(InvalidEntryError, ValueError)


def test_to_dict_uses_camel_case():
    data = TimeEntry.from_dict(_record()).to_dict()

    assert data["userId"] == "user-1"
    assert data["startTime"] == "2025-10-08T09:00:00+00:00"
    assert data["tags"] == ["writing", "planning"]


def test_coerce_entries_keeps_order_and_passes_entries_through():
    existing = TimeEntry.from_dict(_record(_id="first"))

    entries = coerce_entries([existing, _record(_id="second"), _record(_id="third")])

    assert entries[0] is existing
    assert [entry.id for entry in entries] == ["first", "second", "third"]
