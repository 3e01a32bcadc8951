"""Daily note index: rebuilds the waypoint graph from an item listing.

Each :meth:`DailyNoteIndex.rebuild` produces a fresh
:class:`IndexSnapshot` (graph plus identifier lookup) and swaps it in as
a single reference. Readers always see one whole generation; a reader
holding an older snapshot can keep using it.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping, NamedTuple, Protocol, runtime_checkable

from timewalk.graph import WaypointGraph
from timewalk.paths import extract_date
from timewalk.timeline import NavItem, build_timeline
from timewalk.waypoint import Container, Leaf, to_day

log = logging.getLogger(__name__)

ROOT_ID = "daily-notes"
ADJACENT_DIRECTIONS = ("previous", "next")


class Item(NamedTuple):
    """An addressable item owned by the external collection."""

    identifier: str
    path: str


@runtime_checkable
class ItemSource(Protocol):
    """Anything that can list the items to index."""

    def list_items(self) -> Iterable[Item]:
        """Return every addressable item, in any order."""
        ...


class RebuildError(Exception):
    """Raised when the item listing fails; the previous index is kept."""


@dataclass(frozen=True)
class IndexSnapshot:
    """One generation of the index."""

    generation: int
    graph: WaypointGraph
    by_id: Mapping[str, Leaf]
    scanned: int = 0
    indexed: int = 0


def build_snapshot(
    items: Iterable[Item],
    generation: int = 0,
    root_id: str = ROOT_ID,
) -> IndexSnapshot:
    """Build a snapshot from an item listing.

    Items whose path is not a daily note are skipped.
    """
    leaves: list[Leaf] = []
    by_id: dict[str, Leaf] = {}
    scanned = 0
    for item in items:
        scanned += 1
        day = extract_date(item.path)
        if day is None:
            continue
        # UTC midnight so the day never shifts with the local timezone
        t = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
        leaf = Leaf(item.identifier, t, item)
        leaves.append(leaf)
        by_id[item.identifier] = leaf

    root = Container(root_id, tuple(leaves))
    return IndexSnapshot(
        generation=generation,
        graph=WaypointGraph(root),
        by_id=MappingProxyType(by_id),
        scanned=scanned,
        indexed=len(leaves),
    )


class DailyNoteIndex:
    """Owns the current graph generation for a collection of daily notes.

    Parameters
    ----------
    source:
        Item listing to index. ``list_items`` is called on every rebuild.
    root_id:
        Identifier of the root container.
    build:
        Run an initial :meth:`rebuild` on construction.
    """

    def __init__(
        self,
        source: ItemSource,
        root_id: str = ROOT_ID,
        build: bool = True,
    ) -> None:
        self._source = source
        self._root_id = root_id
        self._lock = threading.Lock()
        self._snapshot = build_snapshot((), generation=0, root_id=root_id)
        if build:
            self.rebuild()

    @property
    def snapshot(self) -> IndexSnapshot:
        return self._snapshot

    @property
    def graph(self) -> WaypointGraph:
        return self._snapshot.graph

    def rebuild(self) -> IndexSnapshot:
        """Rebuild the graph and lookup from the source, then swap.

        Raises :class:`RebuildError` if the source listing fails, in
        which case the current snapshot stays in place.
        """
        with self._lock:
            try:
                items = list(self._source.list_items())
            except OSError as exc:
                log.warning("Rebuild failed, keeping generation %d: %s",
                            self._snapshot.generation, exc)
                raise RebuildError(f"Could not list items: {exc}") from exc

            snapshot = build_snapshot(
                items,
                generation=self._snapshot.generation + 1,
                root_id=self._root_id,
            )
            self._snapshot = snapshot

        log.info(
            "Index generation %d: %d daily notes out of %d items",
            snapshot.generation, snapshot.indexed, snapshot.scanned,
        )
        return snapshot

    def get_date_for(self, item: Item | str) -> date | None:
        """Return the day a daily note belongs to, or None.

        Known items resolve through the lookup; others fall back to
        parsing their path.
        """
        identifier, path = (item, item) if isinstance(item, str) else item
        leaf = self._snapshot.by_id.get(identifier)
        if leaf is not None and leaf.time is not None:
            return leaf.time.date()
        day = extract_date(path)
        if day is not None:
            log.debug("Not indexed, date parsed from path: %s -> %s", path, day)
        return day

    def find_entry(self, day: Any) -> Item | None:
        """Return the first item dated ``day``, or None."""
        matches = self._snapshot.graph.find(day)
        if not matches:
            log.debug("No daily note for %s", day)
            return None
        return matches[0].resource

    def find_item(self, day: Any) -> str | None:
        """Return the identifier of the item dated ``day``, or None."""
        entry = self.find_entry(day)
        return entry.identifier if entry is not None else None

    def has_item(self, day: Any) -> bool:
        return self.find_entry(day) is not None

    def get_adjacent(self, day: Any, direction: str) -> str | None:
        """Return the identifier of the neighbouring daily note.

        ``direction`` is ``"previous"`` or ``"next"``. Returns None when
        ``day`` has no note or sits at either end of the sequence.
        """
        if direction not in ADJACENT_DIRECTIONS:
            raise ValueError(
                f"direction must be one of {ADJACENT_DIRECTIONS}, got {direction!r}"
            )
        target = to_day(day)
        if target is None:
            return None

        leaves = self._snapshot.graph.leaves("future")
        current = next(
            (i for i, leaf in enumerate(leaves) if leaf.time.date() == target),  # type: ignore[union-attr]
            None,
        )
        if current is None:
            return None

        neighbour = current - 1 if direction == "previous" else current + 1
        if neighbour < 0 or neighbour >= len(leaves):
            return None
        return leaves[neighbour].identifier

    def get_previous(self, day: Any) -> str | None:
        return self.get_adjacent(day, "previous")

    def get_next(self, day: Any) -> str | None:
        return self.get_adjacent(day, "next")

    def build_timeline(self, active: Any, current: Any = None) -> list[NavItem]:
        """Gap-collapsed timeline of the current generation.

        ``current`` defaults to today (UTC).
        """
        if current is None:
            current = datetime.now(timezone.utc).date()
        return build_timeline(self._snapshot.graph, active, current)
