"""
app/domain/bulk_import.py

Domain models used by the session bulk-import flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# One decoded data line: source header -> raw cell value.
ImportRow = dict[str, Any]


class ActorRole:
    """Roles an authenticated actor can carry."""

    ADMIN = "admin"
    PLATOON_SCOPED = "platoon_scoped"


ALLOWED_ACTOR_ROLES = {ActorRole.ADMIN, ActorRole.PLATOON_SCOPED}


class ReferenceKind:
    """Reference catalogs a row can point into."""

    COURSE = "course"
    SUBJECT = "subject"
    PLATOON = "platoon"
    INSTRUCTOR = "instructor"


REFERENCE_KINDS: tuple[str, ...] = (
    ReferenceKind.COURSE,
    ReferenceKind.SUBJECT,
    ReferenceKind.PLATOON,
    ReferenceKind.INSTRUCTOR,
)


@dataclass(frozen=True)
class Actor:
    """
    Authenticated identity performing an import.

    ``platoon_id`` is only meaningful for platoon-scoped actors.
    """

    user_id: str
    role: str
    platoon_id: int | None = None

    @property
    def is_platoon_scoped(self) -> bool:
        return self.role == ActorRole.PLATOON_SCOPED


@dataclass(frozen=True)
class ReferenceEntity:
    """
    Catalog entry reduced to the fields used for free-text resolution.
    """

    id: int
    short_code: str
    display_name: str


@dataclass(frozen=True)
class CanonicalRow:
    """
    One upload row after header normalization. Absent fields are None.
    """

    course: str | None = None
    subject: str | None = None
    platoon: str | None = None
    instructor: str | None = None
    planned_at: str | datetime | None = None
    duration_min: str | None = None
    venue: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class SessionDraft:
    """
    Fully resolved and validated session, ready for persistence.
    """

    course_id: int
    subject_id: int
    platoon_id: int
    instructor_id: int
    planned_at: datetime
    duration_min: int
    venue: str
    notes: str | None = None


@dataclass(frozen=True)
class RowImportError:
    """
    Failure detail for one upload row.
    """

    row: int
    error: str


@dataclass(frozen=True)
class ImportReport:
    """
    Aggregate outcome of one bulk import call.
    """

    success: int
    failed: int
    errors: list[RowImportError] = field(default_factory=list)
