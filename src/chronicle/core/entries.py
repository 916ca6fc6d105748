"""Time entry model.

A ``TimeEntry`` is one recorded activity interval. Entries arrive from the
store as mapping rows (camelCase from a JSON API or document store, snake_case
from Python callers) and are coerced once at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .time import parse_datetime

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

__all__ = [
    "DEFAULT_CATEGORY",
    "InvalidEntryError",
    "TimeEntry",
    "coerce_entries",
]

DEFAULT_CATEGORY = "general"


class InvalidEntryError(ValueError):
    """Raised when a raw record cannot be turned into a TimeEntry."""


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _parse_tags(raw: Any) -> tuple[str, ...]:
    # The store keeps tags as one comma-separated string.
    if raw is None:
        return ()
    if isinstance(raw, str):
        return tuple(tag.strip() for tag in raw.split(",") if tag.strip())
    return tuple(str(tag) for tag in raw)


@dataclass(frozen=True)
class TimeEntry:
    """One recorded activity interval.

    Attributes
    ----------
    id : str
        Opaque identifier, unique per entry
    user_id : str
        Owner identifier (the engine never filters on it)
    activity : str
        Free-text label
    category : str
        User-defined tag, treated as an opaque key
    duration : int
        Minutes; expected ``>= 0`` but not enforced
    start_time : datetime
        Interval start
    end_time : datetime
        Interval end; expected ``>= start_time`` but not enforced
    mood : str | None
        Optional mood tag
    description : str | None
        Optional free-text notes
    tags : tuple[str, ...]
        Optional tags
    """

    id: str
    user_id: str
    activity: str
    category: str
    duration: int
    start_time: datetime
    end_time: datetime
    mood: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_mood(self) -> bool:
        return bool(self.mood)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> TimeEntry:
        """Build an entry from a raw record.

        Parameters
        ----------
        record
            Mapping with camelCase (``startTime``) or snake_case
            (``start_time``) keys

        Returns
        -------
        TimeEntry
            Coerced entry

        Raises
        ------
        InvalidEntryError
            If ``startTime`` is missing or unparseable, or ``duration`` is
            not an integer
        """
        raw_start = _pick(record, "startTime", "start_time")
        if raw_start is None:
            raise InvalidEntryError(f"Entry {_pick(record, 'id', '_id')!r} has no startTime")

        try:
            start_time = parse_datetime(raw_start)
            raw_end = _pick(record, "endTime", "end_time")
            end_time = parse_datetime(raw_end) if raw_end is not None else start_time
        except ValueError as exc:
            raise InvalidEntryError(str(exc)) from exc

        raw_duration = _pick(record, "duration", default=0)
        if isinstance(raw_duration, bool) or (isinstance(raw_duration, float) and not raw_duration.is_integer()):
            raise InvalidEntryError(f"Invalid duration: {raw_duration!r}")
        try:
            duration = int(raw_duration)
        except (TypeError, ValueError) as exc:
            raise InvalidEntryError(f"Invalid duration: {raw_duration!r}") from exc

        return cls(
            id=str(_pick(record, "id", "_id", default="")),
            user_id=str(_pick(record, "userId", "user_id", default="")),
            activity=str(_pick(record, "activity", default="")),
            category=str(_pick(record, "category", default=DEFAULT_CATEGORY)),
            duration=duration,
            start_time=start_time,
            end_time=end_time,
            mood=_pick(record, "mood") or None,
            description=_pick(record, "description"),
            tags=_parse_tags(_pick(record, "tags")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary with camelCase keys."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "activity": self.activity,
            "category": self.category,
            "duration": self.duration,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "mood": self.mood,
            "description": self.description,
            "tags": list(self.tags),
        }


def coerce_entries(records: Iterable[Mapping[str, Any] | TimeEntry]) -> list[TimeEntry]:
    """Coerce raw records to entries, keeping the caller's order.

    Records that are already ``TimeEntry`` instances pass through unchanged.
    """
    return [record if isinstance(record, TimeEntry) else TimeEntry.from_dict(record) for record in records]
