"""Waypoint nodes: the leaf / container variant indexed by the graph.

A waypoint is either a :class:`Leaf` (one dated item) or a
:class:`Container` (a named group of waypoints). Times are aware UTC
``datetime`` values; the Unix epoch marks a node with no calendar time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Literal, Union

Direction = Literal["past", "future"]
Filter = Literal["all", "leaves", "containers"]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Leaf:
    """A single dated item bound to an externally owned resource."""

    identifier: str
    time: datetime | None
    resource: Any = None

    def __post_init__(self) -> None:
        if self.time is not None:
            object.__setattr__(self, "time", to_utc(self.time))

    @property
    def is_container(self) -> bool:
        return False

    @property
    def children(self) -> tuple[Waypoint, ...]:
        return ()


@dataclass(frozen=True)
class Container:
    """A named group of waypoints.

    Without an explicit time, a container takes the earliest calendar
    time among its children, or the epoch when it has none.
    """

    identifier: str
    children: tuple[Waypoint, ...] = field(default=())
    explicit_time: datetime | None = None

    def __post_init__(self) -> None:
        if self.explicit_time is not None:
            object.__setattr__(self, "explicit_time", to_utc(self.explicit_time))

    @property
    def is_container(self) -> bool:
        return True

    @property
    def time(self) -> datetime:
        if self.explicit_time is not None:
            return self.explicit_time
        times = [c.time for c in self.children if is_calendar_time(c.time)]
        return min(times) if times else EPOCH


Waypoint = Union[Leaf, Container]


def to_utc(value: Any) -> datetime | None:
    """Coerce a date-like value into an aware UTC datetime.

    Accepts ``date`` (midnight UTC), ``datetime`` (naive values are taken
    as UTC) and ISO-8601 strings. Returns None for anything else.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return None


def to_day(value: Any) -> date | None:
    """Return the UTC calendar day of a date-like value."""
    t = to_utc(value)
    return t.date() if t is not None else None


def is_calendar_time(t: datetime | None) -> bool:
    """False for a missing time or the epoch placeholder."""
    return t is not None and t != EPOCH


def same_day(a: Any, b: Any) -> bool:
    """Calendar-day equality in UTC, ignoring time of day."""
    day_a = to_day(a)
    return day_a is not None and day_a == to_day(b)
