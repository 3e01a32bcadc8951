"""Auto-metadata: date-derived frontmatter properties for daily notes.

Properties are configured as ``key: template`` lines. Templates use
moment-style tokens inside braces, e.g. ``{YYYY}-W{WW}`` or ``{YYYY-MM-DD}``.

Notes are dated by day, so time tokens (``HH``, ``H``, ``mm``, ``m``,
``ss``, ``s``) always render as midnight. Locale-dependent and
timezone tokens (``LL``, ``Z``, ``A``, ``X`` and friends) are not
supported and pass through unchanged.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from timewalk.weeks import WEEKDAYS, week_number, week_year

log = logging.getLogger(__name__)

DEFAULT_PROPERTIES = """\
date: {YYYY-MM-DD}
week: {WYYYY}-W{WW}
month: {MM}
year: {YYYY}"""

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_BRACE_RE = re.compile(r'\{([^}]+)\}')
_FORMAT_TOKEN_RE = re.compile(
    r'\[[^\]]*\]|YYYY|YY|Q|MMMM|MMM|MM|M|DDDD|DDD|Do|DD|D|dddd|ddd|dd|d|HH|H|mm|m|ss|s'
)
_FRONTMATTER_RE = re.compile(
    r'\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?', re.MULTILINE | re.DOTALL
)


def parse_properties(text: str) -> list[tuple[str, str]]:
    """Parse ``key: template`` lines, skipping blanks, comments and junk."""
    properties: list[tuple[str, str]] = []
    for line in text.split("\n"):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, template = line.partition(":")
        if not sep:
            continue
        key, template = key.strip(), template.strip()
        if key and template:
            properties.append((key, template))
    return properties


def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}" + {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def format_date(day: date, fmt: str) -> str:
    """Format ``day`` with moment-style tokens; ``[text]`` is literal."""

    def sub(m: re.Match) -> str:
        tok = m.group(0)
        if tok.startswith("["):
            return tok[1:-1]
        weekday = WEEKDAYS[day.weekday()]
        doy = day.timetuple().tm_yday
        return {
            "YYYY": f"{day.year:04d}",
            "YY": f"{day.year % 100:02d}",
            "Q": str((day.month - 1) // 3 + 1),
            "MMMM": MONTHS[day.month - 1],
            "MMM": MONTHS[day.month - 1][:3],
            "MM": f"{day.month:02d}",
            "M": str(day.month),
            "DDDD": f"{doy:03d}",
            "DDD": str(doy),
            "Do": _ordinal(day.day),
            "DD": f"{day.day:02d}",
            "D": str(day.day),
            "dddd": weekday,
            "ddd": weekday[:3],
            "dd": weekday[:2],
            "d": str((day.weekday() + 1) % 7),
            "HH": "00", "H": "0",
            "mm": "00", "m": "0",
            "ss": "00", "s": "0",
        }[tok]

    return _FORMAT_TOKEN_RE.sub(sub, fmt)


def render_template(template: str, day: date, first_day: str = "Monday") -> str | int:
    """Expand a property template for ``day``.

    Week tokens ``{WYYYY}``, ``{WW}`` and ``{W}`` honour ``first_day``.
    A result made only of digits comes back as an int.
    """
    number = week_number(day, first_day)
    result = template.replace("{WYYYY}", str(week_year(day, first_day)))
    result = result.replace("{WW}", f"{number:02d}")
    result = result.replace("{W}", str(number))
    result = _BRACE_RE.sub(lambda m: format_date(day, m.group(1)), result)

    if result.isdigit() and result.isascii():
        return int(result)
    return result


def build_properties(
    day: date,
    namespace: str = "dn-",
    properties_text: str = DEFAULT_PROPERTIES,
    first_day: str = "Monday",
) -> dict[str, str | int]:
    """Namespaced property values for ``day``."""
    return {
        f"{namespace}{key}": render_template(template, day, first_day)
        for key, template in parse_properties(properties_text)
    }


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a note into (frontmatter mapping, body).

    Raises ValueError when the frontmatter is not valid YAML or not a
    mapping.
    """
    m = _FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        data = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid frontmatter YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(data).__name__}")
    return data, text[m.end():]


def join_frontmatter(data: dict[str, Any], body: str) -> str:
    if not data:
        return body
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{dumped}---\n{body}"


def apply_properties(path: Path, properties: dict[str, Any]) -> bool:
    """Merge ``properties`` into the frontmatter of ``path``.

    Returns True if the file changed.
    """
    if not properties:
        return False
    text = path.read_text(encoding="utf-8")
    data, body = split_frontmatter(text)
    merged = {**data, **properties}
    if merged == data:
        return False
    path.write_text(join_frontmatter(merged, body), encoding="utf-8")
    log.info("Updated metadata for %s", path)
    return True
