"""
app/domain package marker.
"""

from app.domain.bulk_import import (
    Actor,
    ActorRole,
    CanonicalRow,
    ImportReport,
    ImportRow,
    ReferenceEntity,
    ReferenceKind,
    RowImportError,
    SessionDraft,
)

__all__ = [
    "Actor",
    "ActorRole",
    "CanonicalRow",
    "ImportReport",
    "ImportRow",
    "ReferenceEntity",
    "ReferenceKind",
    "RowImportError",
    "SessionDraft",
]
