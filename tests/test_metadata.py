"""Tests for timewalk.metadata."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from timewalk.metadata import (
    DEFAULT_PROPERTIES,
    apply_properties,
    build_properties,
    format_date,
    parse_properties,
    render_template,
    split_frontmatter,
)


class TestParseProperties:
    def test_default_properties(self) -> None:
        assert parse_properties(DEFAULT_PROPERTIES) == [
            ("date", "{YYYY-MM-DD}"),
            ("week", "{WYYYY}-W{WW}"),
            ("month", "{MM}"),
            ("year", "{YYYY}"),
        ]

    def test_skips_blank_comments_and_junk(self) -> None:
        text = "\n# comment\nno colon here\n: empty key\nempty:\n  day: {DD}  \n"
        assert parse_properties(text) == [("day", "{DD}")]

    def test_template_may_contain_colons(self) -> None:
        assert parse_properties("time: {HH}:{mm}") == [("time", "{HH}:{mm}")]


class TestFormatDate:
    @pytest.mark.parametrize("fmt,expected", [
        ("YYYY-MM-DD", "2025-03-07"),
        ("YY", "25"),
        ("Q", "1"),
        ("MMMM", "March"),
        ("MMM", "Mar"),
        ("M/D", "3/7"),
        ("DDDD", "066"),
        ("DDD", "66"),
        ("dddd", "Friday"),
        ("ddd", "Fri"),
        ("dd", "Fr"),
        ("d", "5"),
        ("[Day] D", "Day 7"),
        ("MMMM D, YYYY", "March 7, 2025"),
        ("Do", "7th"),
        ("[the] Do [of] MMMM", "the 7th of March"),
        ("HH:mm", "00:00"),
        ("H:m:ss", "0:0:00"),
    ])
    def test_tokens(self, fmt: str, expected: str) -> None:
        assert format_date(date(2025, 3, 7), fmt) == expected


class TestRenderTemplate:
    def test_iso_week_across_year(self) -> None:
        assert render_template("{WYYYY}-W{WW}", date(2024, 12, 30)) == "2025-W01"

    def test_sunday_week(self) -> None:
        assert render_template("W{W}", date(2025, 1, 5), "Sunday") == "W2"

    def test_numeric_result_is_int(self) -> None:
        assert render_template("{MM}", date(2025, 3, 7)) == 3
        assert render_template("{YYYY}", date(2025, 3, 7)) == 2025

    def test_text_outside_braces_untouched(self) -> None:
        assert render_template("Daily {ddd}", date(2025, 3, 7)) == "Daily Fri"

    def test_date_string(self) -> None:
        assert render_template("{YYYY-MM-DD}", date(2025, 3, 7)) == "2025-03-07"

    def test_time_template_renders_midnight(self) -> None:
        template = dict(parse_properties("time: {HH}:{mm}"))["time"]
        assert render_template(template, date(2025, 3, 7)) == "00:00"

    @pytest.mark.parametrize("day,expected", [
        (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"),
        (11, "11th"), (12, "12th"), (13, "13th"),
        (21, "21st"), (22, "22nd"), (23, "23rd"), (31, "31st"),
    ])
    def test_ordinal_day(self, day: int, expected: str) -> None:
        assert render_template("{Do}", date(2025, 1, day)) == expected


def test_build_properties_namespaced() -> None:
    props = build_properties(date(2025, 3, 7), namespace="dn-")
    assert props == {
        "dn-date": "2025-03-07",
        "dn-week": "2025-W10",
        "dn-month": 3,
        "dn-year": 2025,
    }


class TestFrontmatter:
    def test_no_frontmatter(self) -> None:
        assert split_frontmatter("# Title\n") == ({}, "# Title\n")

    def test_existing_frontmatter(self) -> None:
        data, body = split_frontmatter("---\ntags: [a]\n---\n# Title\n")
        assert data == {"tags": ["a"]}
        assert body == "# Title\n"

    def test_empty_frontmatter(self) -> None:
        assert split_frontmatter("---\n---\nbody") == ({}, "body")

    def test_non_mapping_frontmatter(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            split_frontmatter("---\n- a\n- b\n---\nbody")

    def test_malformed_frontmatter(self) -> None:
        with pytest.raises(ValueError, match="Invalid frontmatter"):
            split_frontmatter("---\ntags: [a\n---\nbody\n")

    def test_apply_leaves_malformed_note_alone(self, tmp_path: Path) -> None:
        note = tmp_path / "07 Fri.md"
        note.write_text("---\ntags: [a\n---\nbody\n")
        with pytest.raises(ValueError):
            apply_properties(note, {"dn-year": 2025})
        assert note.read_text() == "---\ntags: [a\n---\nbody\n"

    def test_apply_creates_block(self, tmp_path: Path) -> None:
        note = tmp_path / "07 Fri.md"
        note.write_text("# 2025-03-07\n")
        assert apply_properties(note, {"dn-date": "2025-03-07", "dn-year": 2025})
        data, body = split_frontmatter(note.read_text())
        assert data == {"dn-date": "2025-03-07", "dn-year": 2025}
        assert body == "# 2025-03-07\n"

    def test_apply_merges_and_keeps_other_keys(self, tmp_path: Path) -> None:
        note = tmp_path / "07 Fri.md"
        note.write_text("---\ntags: [daily]\ndn-year: 1999\n---\nbody\n")
        apply_properties(note, {"dn-year": 2025})
        data, body = split_frontmatter(note.read_text())
        assert data == {"tags": ["daily"], "dn-year": 2025}
        assert body == "body\n"

    def test_apply_is_idempotent(self, tmp_path: Path) -> None:
        note = tmp_path / "07 Fri.md"
        note.write_text("body\n")
        assert apply_properties(note, {"dn-month": 3})
        assert not apply_properties(note, {"dn-month": 3})

    def test_apply_nothing(self, tmp_path: Path) -> None:
        note = tmp_path / "07 Fri.md"
        note.write_text("body\n")
        assert not apply_properties(note, {})
        assert note.read_text() == "body\n"
