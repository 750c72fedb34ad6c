"""
app/validators/session_row_validator.py

Ordered validation, authorization and reference resolution for one upload row.

Checks run in a fixed order and stop at the first failure:

    1. required fields present
    2. course, subject, platoon resolved
    3. platoon-scoped actors may only target their own platoon
    4. instructor resolved
    5. planned date-time parses
    6. duration is a positive integer

Expected failures are returned as values, never raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Union

from app.domain.bulk_import import (
    Actor,
    CanonicalRow,
    ReferenceEntity,
    ReferenceKind,
    SessionDraft,
)

if TYPE_CHECKING:
    from app.services.reference_index import ReferenceIndex

MISSING_REQUIRED_FIELDS = "Missing required fields"
FORBIDDEN_PLATOON = "Forbidden: You can only create sessions for your platoon"

REQUIRED_FIELDS: tuple[str, ...] = (
    "course",
    "subject",
    "platoon",
    "instructor",
    "planned_at",
    "duration_min",
    "venue",
)

PLANNED_AT_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y",
    "%d %b %Y %H:%M",
    "%d %b %Y",
    "%b %d, %Y %H:%M",
    "%b %d, %Y",
    "%B %d, %Y %H:%M",
    "%B %d, %Y",
)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

_NOT_FOUND_LABELS: tuple[tuple[str, str, str], ...] = (
    ("course", ReferenceKind.COURSE, "Course"),
    ("subject", ReferenceKind.SUBJECT, "Subject"),
    ("platoon", ReferenceKind.PLATOON, "Platoon"),
)


@dataclass(frozen=True)
class ValidRow:
    draft: SessionDraft


@dataclass(frozen=True)
class RejectedRow:
    reason: str


RowOutcome = Union[ValidRow, RejectedRow]


class SessionRowValidator:
    """
    Turns a CanonicalRow into a SessionDraft or a rejection reason.
    """

    def validate(
        self,
        row: CanonicalRow,
        *,
        actor: Actor,
        references: ReferenceIndex,
    ) -> RowOutcome:
        if not self.has_required_fields(row):
            return RejectedRow(MISSING_REQUIRED_FIELDS)

        resolved: dict[str, ReferenceEntity] = {}
        for attribute, kind, label in _NOT_FOUND_LABELS:
            text = str(getattr(row, attribute))
            entity = references.resolve(kind, text)
            if entity is None:
                return RejectedRow(f"{label} not found: {text}")
            resolved[kind] = entity

        platoon = resolved[ReferenceKind.PLATOON]
        if actor.is_platoon_scoped and platoon.id != actor.platoon_id:
            return RejectedRow(FORBIDDEN_PLATOON)

        instructor_text = str(row.instructor)
        instructor = references.resolve(ReferenceKind.INSTRUCTOR, instructor_text)
        if instructor is None:
            return RejectedRow(f"Instructor not found: {instructor_text}")

        planned_at = parse_planned_at(row.planned_at)
        if planned_at is None:
            return RejectedRow(f"Invalid date format: {row.planned_at}")

        duration_min = parse_duration(row.duration_min)
        if duration_min is None or duration_min <= 0:
            return RejectedRow(f"Invalid duration: {row.duration_min}")

        return ValidRow(
            SessionDraft(
                course_id=resolved[ReferenceKind.COURSE].id,
                subject_id=resolved[ReferenceKind.SUBJECT].id,
                platoon_id=platoon.id,
                instructor_id=instructor.id,
                planned_at=planned_at,
                duration_min=duration_min,
                venue=str(row.venue),
                notes=row.notes or None,
            )
        )

    @staticmethod
    def has_required_fields(row: CanonicalRow) -> bool:
        return all(not _is_blank(getattr(row, name)) for name in REQUIRED_FIELDS)


def parse_planned_at(value: Any) -> datetime | None:
    """
    Parse a planned date-time; naive values are taken as UTC.
    """

    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if _is_blank(value):
        return None

    raw = str(value).strip()
    normalized = raw[:-1] + "+00:00" if raw.endswith(("Z", "z")) else raw
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in PLANNED_AT_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_duration(value: Any) -> int | None:
    """
    Read the leading integer of a duration cell ("90", "90.0", "90 min").
    """

    if _is_blank(value):
        return None
    match = _LEADING_INT_RE.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, datetime):
        return False
    return str(value).strip() == ""
