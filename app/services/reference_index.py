"""
app/services/reference_index.py

Per-import snapshot of the course, subject, platoon and instructor catalogs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from app.domain.bulk_import import REFERENCE_KINDS, ReferenceEntity


class ReferenceCatalog(Protocol):
    """
    Source of reference entities, returned in a stable load order.
    """

    def load_entities(self, kind: str) -> list[ReferenceEntity]:
        ...


class ReferenceIndex:
    """
    Immutable, case-insensitive lookup over the four reference catalogs.

    An entity matches when the text equals its short code or its display
    name, ignoring case. Entities are scanned in load order and the first
    match wins; duplicates are not detected. Callers trim input beforehand.
    """

    def __init__(self, entities_by_kind: Mapping[str, Iterable[ReferenceEntity]]) -> None:
        unknown = set(entities_by_kind) - set(REFERENCE_KINDS)
        if unknown:
            raise ValueError(f"Unknown reference kinds: {sorted(unknown)}")
        self._entities: dict[str, tuple[ReferenceEntity, ...]] = {
            kind: tuple(entities_by_kind.get(kind, ())) for kind in REFERENCE_KINDS
        }

    @classmethod
    def load(cls, catalog: ReferenceCatalog) -> ReferenceIndex:
        """
        Read every catalog once and freeze the result.
        """

        return cls({kind: catalog.load_entities(kind) for kind in REFERENCE_KINDS})

    def resolve(self, kind: str, text: str) -> ReferenceEntity | None:
        try:
            entities = self._entities[kind]
        except KeyError as exc:
            raise ValueError(f"Unknown reference kind: {kind!r}") from exc

        needle = text.casefold()
        for entity in entities:
            if entity.short_code.casefold() == needle or entity.display_name.casefold() == needle:
                return entity
        return None

    def entities(self, kind: str) -> tuple[ReferenceEntity, ...]:
        return self._entities[kind]

    def __len__(self) -> int:
        return sum(len(entities) for entities in self._entities.values())
