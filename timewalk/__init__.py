"""Timewalk: time-indexed navigation over dated markdown notes."""

from timewalk.graph import WaypointGraph
from timewalk.index import DailyNoteIndex, IndexSnapshot, Item, ItemSource, RebuildError
from timewalk.paths import daily_note_path, extract_date
from timewalk.timeline import GapItem, NavItem, NoteItem, build_timeline, locate
from timewalk.waypoint import Container, Leaf, Waypoint

__all__ = [
    "Container",
    "DailyNoteIndex",
    "GapItem",
    "IndexSnapshot",
    "Item",
    "ItemSource",
    "Leaf",
    "NavItem",
    "NoteItem",
    "RebuildError",
    "Waypoint",
    "WaypointGraph",
    "build_timeline",
    "daily_note_path",
    "extract_date",
    "locate",
]
