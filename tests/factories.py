"""
Test doubles for bulk-import tests: an in-memory reference catalog, a
recording session writer and a controllable millisecond clock.
"""

from __future__ import annotations

from app.domain.bulk_import import ReferenceEntity, ReferenceKind, SessionDraft

REFERENCE_DATA: dict[str, list[ReferenceEntity]] = {
    ReferenceKind.COURSE: [
        ReferenceEntity(id=1, short_code="CS-101", display_name="Introduction to Computer Science"),
        ReferenceEntity(id=2, short_code="MATH-201", display_name="Advanced Mathematics"),
    ],
    ReferenceKind.SUBJECT: [
        ReferenceEntity(id=10, short_code="PROG-101", display_name="Programming Basics"),
        ReferenceEntity(id=11, short_code="CALC-201", display_name="Calculus"),
    ],
    ReferenceKind.PLATOON: [
        ReferenceEntity(id=2, short_code="PLT-A", display_name="Alpha Platoon"),
        ReferenceEntity(id=5, short_code="PLT-B", display_name="Bravo Platoon"),
    ],
    ReferenceKind.INSTRUCTOR: [
        ReferenceEntity(id=7, short_code="john.smith@example.com", display_name="Dr. John Smith"),
        ReferenceEntity(id=8, short_code="jane.doe@example.com", display_name="Prof. Jane Doe"),
    ],
}

CSV_HEADER = "Course,Subject,Platoon,Instructor,Planned At,Duration (min),Venue,Notes"

VALID_LINE = "CS-101,PROG-101,PLT-A,john.smith@example.com,2026-03-02T09:00:00Z,90,Hall 1,"


class FakeClock:
    def __init__(self, now_ms: int = 1_000_000) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, delta_ms: int) -> None:
        self.now_ms += delta_ms


class FakeCatalog:
    def __init__(self, data: dict[str, list[ReferenceEntity]] | None = None) -> None:
        self._data = data if data is not None else REFERENCE_DATA
        self.loads: list[str] = []

    def load_entities(self, kind: str) -> list[ReferenceEntity]:
        self.loads.append(kind)
        return list(self._data.get(kind, []))


class RecordingWriter:
    """Stores drafts; raises on the call numbers listed in ``fail_on``."""

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls = 0
        self.saved: list[SessionDraft] = []

    def create_session(self, draft: SessionDraft) -> SessionDraft:
        self.calls += 1
        if self.calls in self.fail_on:
            raise RuntimeError("duplicate key value violates unique constraint")
        self.saved.append(draft)
        return draft


def csv_bytes(*lines: str) -> bytes:
    return "\n".join((CSV_HEADER, *lines)).encode("utf-8")
