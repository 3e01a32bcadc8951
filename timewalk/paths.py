"""Daily note path parsing.

Daily notes live at ``YYYY/MM. Mon/DD Ddd.md`` anywhere in the vault,
e.g. ``0C. Calendarish/2025/12. Dec/29 Mon.md``. :func:`extract_date` is
the single parser used by both the index rebuild and date lookups.
"""

from __future__ import annotations

import re
from datetime import date

# Groups: year, month, day
DAILY_NOTE_RE = re.compile(r'(\d{4})/(\d{2})\.\s*\w+/(\d{2})\s+\w+\.md$', re.ASCII)

MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def extract_date(path: str) -> date | None:
    """Extract the calendar date encoded in a daily note path.

    Returns None when the path does not follow the daily note layout or
    names an impossible date.
    """
    m = DAILY_NOTE_RE.search(path.replace("\\", "/"))
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def daily_note_path(day: date, folder: str = "") -> str:
    """Build the vault-relative path for a day's note."""
    rel = (
        f"{day.year:04d}/{day.month:02d}. {MONTH_ABBR[day.month - 1]}/"
        f"{day.day:02d} {WEEKDAY_ABBR[day.weekday()]}.md"
    )
    folder = folder.strip("/")
    return f"{folder}/{rel}" if folder else rel
