"""
tests/test_column_normalizer.py

ColumnNormalizer: header compaction, keyword priority and row shaping.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from app.domain.bulk_import import CanonicalRow
from app.mappers.column_normalizer import (
    coerce_cell,
    normalize_header_key,
    normalize_row,
    normalize_rows,
    resolve_headers,
)


class TestHeaderKey:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Course", "course"),
            ("  course code ", "course"),
            ("Subject Title", "subject"),
            ("PLATOON", "platoon"),
            ("Instructor E-mail", "instructor"),
            ("Planned Date/Time", "planned_at"),
            ("PLANNEDAT", "planned_at"),
            ("planned\tat", "planned_at"),
            ("Duration (min)", "duration_min"),
            ("Venue", "venue"),
            ("Notes", "notes"),
        ],
    )
    def test_known_headers(self, header: str, expected: str) -> None:
        assert normalize_header_key(header) == expected

    @pytest.mark.parametrize("header", ["CourseSubject", "CourseSubjectRef", "Subject of Course"])
    def test_course_wins_over_later_keywords(self, header: str) -> None:
        assert normalize_header_key(header) == "course"

    def test_platoon_instructor_binds_to_platoon(self) -> None:
        assert normalize_header_key("Platoon Instructor") == "platoon"

    def test_whitespace_inside_keyword_is_collapsed(self) -> None:
        assert normalize_header_key("Cour se") == "course"

    @pytest.mark.parametrize("header", ["Room", "Start", "Comments", ""])
    def test_unrecognized_headers_are_dropped(self, header: str) -> None:
        assert normalize_header_key(header) is None


class TestResolveHeaders:
    def test_ambiguous_header_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="app.mappers.column_normalizer"):
            bindings = resolve_headers(["CourseSubject", "Venue", "Room"])

        assert bindings == {"CourseSubject": "course", "Venue": "venue"}
        assert "CourseSubject" in caplog.text


class TestNormalizeRow:
    def test_builds_canonical_row_and_ignores_unknown_columns(self) -> None:
        row = normalize_row(
            {
                "Course": " CS-101 ",
                "Subject": "PROG-101",
                "Platoon": "PLT-A",
                "Instructor": "john.smith@example.com",
                "Planned Date/Time": "2026-03-02 09:00",
                "Duration": "90",
                "Venue": "Hall 1",
                "Room": "ignored",
            }
        )

        assert row == CanonicalRow(
            course="CS-101",
            subject="PROG-101",
            platoon="PLT-A",
            instructor="john.smith@example.com",
            planned_at="2026-03-02 09:00",
            duration_min="90",
            venue="Hall 1",
            notes=None,
        )

    def test_missing_columns_are_none(self) -> None:
        row = normalize_row({"Course": "CS-101"})

        assert row.course == "CS-101"
        assert row.subject is None
        assert row.notes is None

    def test_later_column_wins_for_same_field(self) -> None:
        row = normalize_row({"Course Code": "CS-101", "Course Title": "Advanced Mathematics"})

        assert row.course == "Advanced Mathematics"

    def test_normalize_rows_keeps_positions(self) -> None:
        rows = normalize_rows([{"Course": "A"}, {"Course": "B"}, {"Course": None}])

        assert [row.course for row in rows] == ["A", "B", None]


class TestCoerceCell:
    def test_blank_text_is_none(self) -> None:
        assert coerce_cell("   ") is None
        assert coerce_cell(None) is None
        assert coerce_cell(float("nan")) is None

    def test_integral_float_drops_fraction(self) -> None:
        assert coerce_cell(90.0) == "90"
        assert coerce_cell(90.5) == "90.5"
        assert coerce_cell(101) == "101"

    def test_datetime_is_preserved(self) -> None:
        value = datetime(2026, 3, 2, 9, 0)
        assert coerce_cell(value) is value
