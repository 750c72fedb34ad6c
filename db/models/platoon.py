"""
db/models/platoon.py

Platoon model: the trainee group a session is scheduled for.
Platoon-scoped users may only schedule sessions for their own platoon.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Platoon(Base, TimestampMixin):
    """
    A platoon identified by a unique key (e.g. ``PLT-A``) and a display name.
    """

    __tablename__ = "platoons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    key: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Short platoon identifier used in uploads",
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Platoon id={self.id} key={self.key!r}>"
