"""JSON Schema for the analytics report wire shape."""

from __future__ import annotations

import copy
from typing import Any

from jsonschema import Draft7Validator

_NON_NEGATIVE_INT = {"type": "integer", "minimum": 0}

ANALYTICS_REPORT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "AnalyticsReport",
    "type": "object",
    "required": [
        "totalTimeTracked",
        "totalEntries",
        "streakDays",
        "productivityScore",
        "categoryByDate",
        "moodTrends",
        "peakHours",
        "weeklyComparison",
        "categoryBreakdown",
    ],
    "properties": {
        # Durations are not validated on input, so totals may be negative.
        "totalTimeTracked": {"type": "integer"},
        "totalEntries": _NON_NEGATIVE_INT,
        "streakDays": _NON_NEGATIVE_INT,
        "productivityScore": {"type": "integer"},
        "categoryByDate": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["date", "categories"],
                "properties": {
                    "date": {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"},
                    "categories": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["category", "duration", "activities"],
                            "properties": {
                                "category": {"type": "string"},
                                "duration": {"type": "integer"},
                                "activities": {"type": "array", "items": {"type": "string"}},
                            },
                            "additionalProperties": False,
                        },
                    },
                },
                "additionalProperties": False,
            },
        },
        "moodTrends": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["mood", "count"],
                "properties": {
                    "mood": {"type": "string", "minLength": 1},
                    "count": {"type": "integer", "minimum": 1},
                },
                "additionalProperties": False,
            },
        },
        "peakHours": {
            "type": "array",
            "maxItems": 24,
            "items": {
                "type": "object",
                "required": ["hour", "duration"],
                "properties": {
                    "hour": {"type": "integer", "minimum": 0, "maximum": 23},
                    "duration": {"type": "integer"},
                },
                "additionalProperties": False,
            },
        },
        "weeklyComparison": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["week", "duration"],
                "properties": {
                    "week": {"type": "string"},
                    "duration": {"type": "integer"},
                },
                "additionalProperties": False,
            },
        },
        "categoryBreakdown": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["category", "duration", "percentage"],
                "properties": {
                    "category": {"type": "string"},
                    "duration": {"type": "integer"},
                    "percentage": {"type": "integer"},
                },
                "additionalProperties": False,
            },
        },
    },
    "additionalProperties": False,
}


class ReportValidator:
    """Validate report dictionaries against :data:`ANALYTICS_REPORT_SCHEMA`.

    Example:
        >>> validator = ReportValidator()
        >>> validator.validate_report({"totalEntries": 0})
        ["[required] 'totalTimeTracked' is a required property (path: <root>)", ...]
    """

    def __init__(self) -> None:
        self.validator = Draft7Validator(ANALYTICS_REPORT_SCHEMA)

    def validate_report(self, report_data: dict[str, Any]) -> list[str]:
        """Return a list of human readable validation errors."""

        collected: list[str] = []

        for error in sorted(
            self.validator.iter_errors(report_data),
            key=lambda err: [str(part) for part in err.absolute_path],
        ):
            location = " -> ".join(str(part) for part in error.absolute_path) or "<root>"
            collected.append(f"[{error.validator}] {error.message} (path: {location})")

        return collected


def validate_report(report_data: dict[str, Any]) -> bool:
    """Return ``True`` when ``report_data`` passes schema validation."""

    return not ReportValidator().validate_report(report_data)


def get_report_schema() -> dict[str, Any]:
    """Return a deep copy of :data:`ANALYTICS_REPORT_SCHEMA`."""

    return copy.deepcopy(ANALYTICS_REPORT_SCHEMA)


__all__ = [
    "ANALYTICS_REPORT_SCHEMA",
    "ReportValidator",
    "get_report_schema",
    "validate_report",
]
