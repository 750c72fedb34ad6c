"""
db/models/course.py

Course model: one entry of the course catalog that sessions are planned for.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Course(Base, TimestampMixin):
    """
    A course identified by a unique short code (e.g. ``CS-101``).
    """

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    code: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Course id={self.id} code={self.code!r}>"
