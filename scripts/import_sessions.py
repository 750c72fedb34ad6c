"""
Run a session bulk import from a local CSV / XLSX / XLS file.

Uses the same service as the HTTP endpoint, including its rate limiter.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from app.domain.bulk_import import Actor, ActorRole
from app.services.bulk_import_service import get_bulk_import_service
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Import training sessions from a file.")
    parser.add_argument("path", type=Path, help="CSV, XLSX or XLS file to import.")
    parser.add_argument("--user-id", default="cli", help="Actor id used for rate limiting.")
    parser.add_argument(
        "--platoon-id",
        type=int,
        default=None,
        help="Restrict the import to one platoon, as a platoon-scoped user.",
    )
    args = parser.parse_args()

    actor = Actor(
        user_id=args.user_id,
        role=ActorRole.PLATOON_SCOPED if args.platoon_id is not None else ActorRole.ADMIN,
        platoon_id=args.platoon_id,
    )

    service = get_bulk_import_service()
    with SessionLocal() as db:
        report = service.import_sessions(
            content=args.path.read_bytes(),
            filename=args.path.name,
            actor=actor,
            db=db,
        )

    print(json.dumps(asdict(report), indent=2))
    return 1 if report.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
