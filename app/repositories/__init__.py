"""
app/repositories package marker.
"""

from app.repositories.reference_repository import ReferenceRepository
from app.repositories.session_repository import SessionPersistenceError, SessionRepository

__all__ = [
    "ReferenceRepository",
    "SessionPersistenceError",
    "SessionRepository",
]
