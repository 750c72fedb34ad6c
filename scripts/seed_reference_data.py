"""
Seed the reference catalogs (platoons, courses, subjects, instructors).

Existing rows with the same code / key / e-mail are left untouched unless
--reset is given, which first deletes all sessions and catalog rows.
"""

from __future__ import annotations

import argparse
import json

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert

from db.models import Course, Instructor, Platoon, Subject, TrainingSession
from db.session import SessionLocal

PLATOONS = [
    {"key": "PLT-A", "name": "Alpha Platoon"},
    {"key": "PLT-B", "name": "Bravo Platoon"},
    {"key": "PLT-C", "name": "Charlie Platoon"},
]

COURSES = [
    {"code": "CS-101", "title": "Introduction to Computer Science"},
    {"code": "MATH-201", "title": "Advanced Mathematics"},
    {"code": "PHY-101", "title": "Physics Fundamentals"},
]

SUBJECTS = [
    {"code": "PROG-101", "title": "Programming Basics"},
    {"code": "CALC-201", "title": "Calculus"},
    {"code": "MECH-101", "title": "Mechanics"},
    {"code": "ALGO-301", "title": "Algorithms"},
]

INSTRUCTORS = [
    {"name": "Dr. John Smith", "email": "john.smith@example.com"},
    {"name": "Prof. Jane Doe", "email": "jane.doe@example.com"},
    {"name": "Dr. Robert Johnson", "email": "robert.johnson@example.com"},
]

_SEED_PLAN = (
    (Platoon, PLATOONS, "key"),
    (Course, COURSES, "code"),
    (Subject, SUBJECTS, "code"),
    (Instructor, INSTRUCTORS, "email"),
)


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed scheduler reference catalogs.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete all sessions and catalog rows before seeding.",
    )
    args = parser.parse_args()

    inserted: dict[str, int] = {}
    with SessionLocal() as db:
        with db.begin():
            if args.reset:
                db.execute(delete(TrainingSession))
                for model, _, _ in _SEED_PLAN:
                    db.execute(delete(model))

            for model, rows, unique_column in _SEED_PLAN:
                stmt = (
                    insert(model)
                    .values(rows)
                    .on_conflict_do_nothing(index_elements=[unique_column])
                    .returning(model.id)
                )
                inserted[model.__tablename__] = len(db.scalars(stmt).all())

    print(json.dumps({"reset": args.reset, "inserted": inserted}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
