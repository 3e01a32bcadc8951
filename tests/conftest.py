"""Shared fixtures for timewalk tests."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable

import pytest

from timewalk.index import Item
from timewalk.paths import daily_note_path


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def note_item(day: date, folder: str = "Journal") -> Item:
    path = daily_note_path(day, folder)
    return Item(path, path)


class FakeSource:
    """In-memory item listing that records how often it was listed."""

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self.items: list[Item] = list(items)
        self.calls = 0

    def list_items(self) -> list[Item]:
        self.calls += 1
        return list(self.items)


class FailingSource:
    """Listing that always fails like an unreadable vault."""

    def list_items(self) -> list[Item]:
        raise PermissionError("vault is not readable")


@pytest.fixture()
def sample_items() -> list[Item]:
    """Notes on Jan 1, 2 and 5 plus unrelated markdown files."""
    return [
        note_item(date(2025, 1, 5)),
        note_item(date(2025, 1, 1)),
        Item("notes/random.md", "notes/random.md"),
        note_item(date(2025, 1, 2)),
        Item("README.md", "README.md"),
    ]


@pytest.fixture()
def source(sample_items: list[Item]) -> FakeSource:
    return FakeSource(sample_items)
