"""Tests for timewalk.paths."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from timewalk.paths import daily_note_path, extract_date


class TestExtractDate:
    def test_basic(self) -> None:
        assert extract_date("2025/03. Mar/07 Fri.md") == date(2025, 3, 7)

    def test_nested_in_folder(self) -> None:
        assert extract_date("0C. Calendarish/2025/12. Dec/29 Mon.md") == date(2025, 12, 29)

    def test_no_space_after_dot(self) -> None:
        assert extract_date("2025/03.Mar/07 Fri.md") == date(2025, 3, 7)

    def test_windows_separators(self) -> None:
        assert extract_date("2025\\03. Mar\\07 Fri.md") == date(2025, 3, 7)

    @pytest.mark.parametrize("path", [
        "notes/random.md",
        "2025/03. Mar/07 Fri.txt",
        "2025/03. Mar/07.md",
        "2025/3. Mar/07 Fri.md",
        "2025-03-07.md",
        "2025/03. Mar/07 Fri.md.bak",
    ])
    def test_non_daily_paths(self, path: str) -> None:
        assert extract_date(path) is None

    def test_impossible_date(self) -> None:
        assert extract_date("2025/02. Feb/30 Sun.md") is None
        assert extract_date("2025/13. Foo/01 Mon.md") is None


class TestDailyNotePath:
    def test_layout(self) -> None:
        assert daily_note_path(date(2025, 12, 29)) == "2025/12. Dec/29 Mon.md"

    def test_folder(self) -> None:
        assert daily_note_path(date(2025, 3, 7), "Journal/") == "Journal/2025/03. Mar/07 Fri.md"

    def test_inverse_of_extract(self) -> None:
        start = date(2024, 2, 20)
        for offset in range(0, 400, 7):
            day = start + timedelta(days=offset)
            assert extract_date(daily_note_path(day, "x")) == day
