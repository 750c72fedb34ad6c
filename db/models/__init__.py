"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.course import Course
from db.models.instructor import Instructor
from db.models.platoon import Platoon
from db.models.subject import Subject
from db.models.training_session import TrainingSession

__all__ = [
    "Course",
    "Instructor",
    "Platoon",
    "Subject",
    "TrainingSession",
]
