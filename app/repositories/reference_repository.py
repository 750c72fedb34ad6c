"""
app/repositories/reference_repository.py

Read access to the course, subject, platoon and instructor catalogs.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.bulk_import import ReferenceEntity, ReferenceKind
from db.models.course import Course
from db.models.instructor import Instructor
from db.models.platoon import Platoon
from db.models.subject import Subject


class ReferenceRepository:
    """
    Loads reference catalogs for listing endpoints and import snapshots.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def load_entities(self, kind: str) -> list[ReferenceEntity]:
        """
        Return every entity of one catalog in ascending id order.

        Instructors use their e-mail as the short code.
        """

        if kind == ReferenceKind.COURSE:
            return [
                ReferenceEntity(id=row.id, short_code=row.code, display_name=row.title)
                for row in self._session.scalars(select(Course).order_by(Course.id))
            ]
        if kind == ReferenceKind.SUBJECT:
            return [
                ReferenceEntity(id=row.id, short_code=row.code, display_name=row.title)
                for row in self._session.scalars(select(Subject).order_by(Subject.id))
            ]
        if kind == ReferenceKind.PLATOON:
            return [
                ReferenceEntity(id=row.id, short_code=row.key, display_name=row.name)
                for row in self._session.scalars(select(Platoon).order_by(Platoon.id))
            ]
        if kind == ReferenceKind.INSTRUCTOR:
            return [
                ReferenceEntity(id=row.id, short_code=row.email, display_name=row.name)
                for row in self._session.scalars(select(Instructor).order_by(Instructor.id))
            ]
        raise ValueError(f"Unknown reference kind: {kind!r}")

    def list_courses(self) -> Sequence[Course]:
        return self._session.scalars(select(Course).order_by(Course.code)).all()

    def list_subjects(self) -> Sequence[Subject]:
        return self._session.scalars(select(Subject).order_by(Subject.code)).all()

    def list_platoons(self) -> Sequence[Platoon]:
        return self._session.scalars(select(Platoon).order_by(Platoon.key)).all()

    def list_instructors(self) -> Sequence[Instructor]:
        return self._session.scalars(select(Instructor).order_by(Instructor.name)).all()
