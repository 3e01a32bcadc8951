"""Gap-collapsing timeline of daily notes.

The timeline interleaves one note entry per daily note with gap entries
that summarise runs of missing days between two notes. Nothing is
emitted before the first note or after the last one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Literal, Union

from timewalk.graph import WaypointGraph
from timewalk.waypoint import to_day


@dataclass(frozen=True)
class NoteItem:
    """An existing daily note."""

    date: date
    item: Any
    is_active: bool = False
    is_current: bool = False

    kind: Literal["note"] = "note"

    @property
    def span(self) -> int:
        return 1


@dataclass(frozen=True)
class GapItem:
    """A run of ``gap_count`` missing days starting at ``date``."""

    date: date
    gap_count: int

    kind: Literal["gap"] = "gap"

    @property
    def span(self) -> int:
        return self.gap_count

    @property
    def is_placeholder(self) -> bool:
        """A single missing day, shown as a note that can be created."""
        return self.gap_count == 1

    @property
    def end(self) -> date:
        """Last missing day of the run."""
        return self.date + timedelta(days=self.gap_count - 1)


NavItem = Union[NoteItem, GapItem]


def build_timeline(graph: WaypointGraph, active_date: Any, current_date: Any) -> list[NavItem]:
    """Build the ordered note/gap sequence for ``graph``.

    Parameters
    ----------
    graph:
        Graph whose calendar leaves are the daily notes.
    active_date:
        Day of the note being viewed; its entry gets ``is_active``.
    current_date:
        Today; its entry gets ``is_current``.

    Returns
    -------
    list[NavItem]
        Oldest first. Empty when the graph has no dated leaves.
    """
    active = to_day(active_date)
    current = to_day(current_date)
    items: list[NavItem] = []

    leaves = graph.leaves("future")
    for i, leaf in enumerate(leaves):
        day = leaf.time.date()  # type: ignore[union-attr]
        items.append(NoteItem(
            date=day,
            item=leaf.resource,
            is_active=day == active,
            is_current=day == current,
        ))

        if i + 1 < len(leaves):
            next_day = leaves[i + 1].time.date()  # type: ignore[union-attr]
            missing = (next_day - day).days - 1
            if missing > 0:
                items.append(GapItem(date=day + timedelta(days=1), gap_count=missing))

    return items


def locate(items: list[NavItem], day: Any) -> int | None:
    """Index of the entry covering ``day``, or None if outside the timeline."""
    target = to_day(day)
    if target is None:
        return None
    for i, entry in enumerate(items):
        if entry.date <= target < entry.date + timedelta(days=entry.span):
            return i
    return None


def active_index(items: list[NavItem]) -> int | None:
    """Index of the first active note, or None."""
    for i, entry in enumerate(items):
        if isinstance(entry, NoteItem) and entry.is_active:
            return i
    return None


def viewport(items: list[NavItem], center: int | None, size: int) -> list[NavItem]:
    """Up to ``size`` consecutive entries centred on index ``center``.

    Without a centre the newest entries are shown.
    """
    if size <= 0 or not items:
        return []
    if center is None:
        return items[-size:]
    start = max(0, min(center - size // 2, len(items) - size))
    return items[start:start + size]
