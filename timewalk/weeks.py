"""Week helpers for the weekly navigation mode."""

from __future__ import annotations

from datetime import date, timedelta

WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def _first_weekday(first_day: str) -> int:
    try:
        return WEEKDAYS.index(first_day)
    except ValueError:
        raise ValueError(f"Unknown first day of week: {first_day!r}") from None


def dates_in_week(day: date, first_day: str = "Monday") -> list[date]:
    """Return the seven dates of the week containing ``day``."""
    offset = (day.weekday() - _first_weekday(first_day)) % 7
    start = day - timedelta(days=offset)
    return [start + timedelta(days=i) for i in range(7)]


def week_number(day: date, first_day: str = "Monday") -> int:
    """Week of the year for ``day``.

    Monday-based weeks follow ISO 8601. Any other start counts weeks
    from the Sunday on or before January 1.
    """
    if first_day == "Monday":
        return day.isocalendar()[1]
    _first_weekday(first_day)
    jan1 = date(day.year, 1, 1)
    first_sunday = jan1 - timedelta(days=(jan1.weekday() + 1) % 7)
    return (day - first_sunday).days // 7 + 1


def week_year(day: date, first_day: str = "Monday") -> int:
    """Year the week of ``day`` belongs to (ISO year for Monday weeks)."""
    if first_day == "Monday":
        return day.isocalendar()[0]
    return day.year


def shift_weeks(day: date, offset: int) -> date:
    return day + timedelta(weeks=offset)
