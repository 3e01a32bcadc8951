"""Time-indexed traversal over a tree of waypoints."""

from __future__ import annotations

from functools import cached_property
from typing import Any, Callable

from timewalk.waypoint import (
    Container,
    Direction,
    Filter,
    Leaf,
    Waypoint,
    is_calendar_time,
    same_day,
    to_utc,
)

DIRECTIONS: tuple[str, ...] = ("past", "future")
FILTERS: tuple[str, ...] = ("all", "leaves", "containers")


class WaypointGraph:
    """Traversal engine over one root waypoint.

    The graph never changes after construction, so the pre-order
    flattening is computed once and reused by every query.

    Parameters
    ----------
    root:
        Root waypoint, usually a :class:`Container`.
    """

    def __init__(self, root: Waypoint) -> None:
        self._root = root

    @property
    def root(self) -> Waypoint:
        return self._root

    @cached_property
    def _nodes(self) -> tuple[Waypoint, ...]:
        result: list[Waypoint] = []
        stack: list[Waypoint] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node)
            if isinstance(node, Container):
                stack.extend(reversed(node.children))
        return tuple(result)

    def traverse(
        self,
        visit: Callable[[Waypoint], Any],
        direction: Direction = "past",
        filter: Filter = "all",
        include_non_calendar: bool = False,
    ) -> None:
        """Call ``visit`` for every matching node in time order.

        ``past`` visits newest first, ``future`` oldest first. Leaves
        without a calendar time are dropped unless
        ``include_non_calendar`` is set. Ties keep flattening order.
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction!r}")
        if filter not in FILTERS:
            raise ValueError(f"Unknown filter: {filter!r}")

        selected: list[Waypoint] = []
        for node in self._nodes:
            if filter == "leaves" and node.is_container:
                continue
            if filter == "containers" and not node.is_container:
                continue
            if not include_non_calendar and not node.is_container:
                if not is_calendar_time(node.time):
                    continue
            selected.append(node)

        # Missing times (only reachable with include_non_calendar) sort as earliest
        keyed = [(_sort_key(n), i, n) for i, n in enumerate(selected)]
        if direction == "past":
            keyed.sort(key=lambda k: (-k[0], k[1]))
        else:
            keyed.sort(key=lambda k: (k[0], k[1]))

        for _, _, node in keyed:
            visit(node)

    def leaves(self, direction: Direction = "future") -> list[Leaf]:
        """Calendar leaves in time order (what ``traverse`` would visit)."""
        out: list[Leaf] = []
        self.traverse(out.append, direction=direction, filter="leaves")  # type: ignore[arg-type]
        return out

    def navigate(self, target: Any) -> Leaf | None:
        """Return the first leaf whose time equals ``target`` exactly."""
        t = to_utc(target)
        if t is None:
            return None
        for node in self._nodes:
            if isinstance(node, Leaf) and node.time is not None and node.time == t:
                return node
        return None

    def find(self, target: Any) -> list[Leaf]:
        """Return every calendar leaf on the same UTC day as ``target``."""
        t = to_utc(target)
        if t is None:
            return []
        return [
            node for node in self._nodes
            if isinstance(node, Leaf)
            and is_calendar_time(node.time)
            and same_day(node.time, t)
        ]

    def __len__(self) -> int:
        return len(self._nodes)


def _sort_key(node: Waypoint) -> float:
    t = node.time
    return t.timestamp() if t is not None else float("-inf")
