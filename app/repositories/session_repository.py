"""
app/repositories/session_repository.py

Persistence for scheduled training sessions.
"""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.bulk_import import SessionDraft
from db.models.training_session import TrainingSession


class SessionPersistenceError(RuntimeError):
    """
    Raised when one session row cannot be committed.
    """


class SessionRepository:
    """
    Inserts sessions one row per transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create_session(self, draft: SessionDraft) -> TrainingSession:
        """
        Insert and commit one session.

        The row is either committed whole or rolled back; earlier commits on
        the same ORM session are unaffected by a failure here.
        """

        record = TrainingSession(
            course_id=draft.course_id,
            subject_id=draft.subject_id,
            platoon_id=draft.platoon_id,
            instructor_id=draft.instructor_id,
            planned_at=draft.planned_at,
            duration_min=draft.duration_min,
            venue=draft.venue,
            notes=draft.notes,
        )
        try:
            self._session.add(record)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            detail = getattr(exc, "orig", None) or exc
            raise SessionPersistenceError(str(detail).strip()) from exc
        return record
