"""Tests for timewalk.weeks."""

from __future__ import annotations

from datetime import date

import pytest

from timewalk.weeks import dates_in_week, shift_weeks, week_number, week_year


class TestDatesInWeek:
    def test_monday_start(self) -> None:
        days = dates_in_week(date(2025, 1, 1))
        assert days[0] == date(2024, 12, 30)
        assert days[-1] == date(2025, 1, 5)
        assert len(days) == 7

    def test_sunday_start(self) -> None:
        days = dates_in_week(date(2025, 1, 1), "Sunday")
        assert days[0] == date(2024, 12, 29)
        assert days[-1] == date(2025, 1, 4)

    def test_day_is_first_day(self) -> None:
        assert dates_in_week(date(2025, 1, 6))[0] == date(2025, 1, 6)

    def test_unknown_first_day(self) -> None:
        with pytest.raises(ValueError, match="first day"):
            dates_in_week(date(2025, 1, 1), "Funday")


class TestWeekNumber:
    def test_iso_week(self) -> None:
        assert week_number(date(2024, 12, 30)) == 1
        assert week_year(date(2024, 12, 30)) == 2025

    def test_iso_week_53(self) -> None:
        assert week_number(date(2021, 1, 1)) == 53
        assert week_year(date(2021, 1, 1)) == 2020

    def test_sunday_weeks(self) -> None:
        assert week_number(date(2025, 1, 1), "Sunday") == 1
        assert week_number(date(2025, 1, 4), "Sunday") == 1
        assert week_number(date(2025, 1, 5), "Sunday") == 2
        assert week_year(date(2024, 12, 30), "Sunday") == 2024

    def test_sunday_weeks_when_year_starts_on_sunday(self) -> None:
        assert week_number(date(2023, 1, 1), "Sunday") == 1
        assert week_number(date(2023, 1, 8), "Sunday") == 2


def test_shift_weeks() -> None:
    assert shift_weeks(date(2025, 1, 1), -1) == date(2024, 12, 25)
    assert shift_weeks(date(2025, 1, 1), 2) == date(2025, 1, 15)
