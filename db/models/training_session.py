"""
db/models/training_session.py

TrainingSession model: one planned training session.

Stored in the ``sessions`` table; the ORM class is named TrainingSession so it
does not collide with SQLAlchemy's Session.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.course import Course
    from db.models.instructor import Instructor
    from db.models.platoon import Platoon
    from db.models.subject import Subject


class TrainingSession(Base, TimestampMixin):
    """
    A scheduled session linking course, subject, platoon and instructor.

    Rows are written whole: bulk import inserts one fully validated row per
    transaction and never updates a row in place.
    """

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
    )

    subject_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )

    platoon_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("platoons.id", ondelete="CASCADE"),
        nullable=False,
    )

    instructor_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("instructors.id", ondelete="CASCADE"),
        nullable=False,
    )

    planned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    duration_min: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Planned length in minutes, always > 0",
    )

    venue: Mapped[str] = mapped_column(String(255), nullable=False)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ── Relationships ──────────────────────────────────────────────────────────

    course: Mapped["Course"] = relationship("Course")
    subject: Mapped["Subject"] = relationship("Subject")
    platoon: Mapped["Platoon"] = relationship("Platoon")
    instructor: Mapped["Instructor"] = relationship("Instructor")

    # ── Indexes ────────────────────────────────────────────────────────────────

    __table_args__ = (
        Index("ix_sessions_planned_at", "planned_at"),
        Index("ix_sessions_platoon_id", "platoon_id"),
        Index("ix_sessions_instructor_id", "instructor_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<TrainingSession id={self.id} course_id={self.course_id} "
            f"platoon_id={self.platoon_id} planned_at={self.planned_at!s}>"
        )
