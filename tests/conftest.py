from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.domain.bulk_import import Actor, ActorRole
from app.services.bulk_import_service import BulkImportService
from app.services.rate_limiter import FixedWindowRateLimiter, RateLimitConfig
from app.services.reference_index import ReferenceIndex
from db.base import Base
from db.models import Course, Instructor, Platoon, Subject
from factories import REFERENCE_DATA, FakeCatalog, FakeClock, RecordingWriter


@pytest.fixture()
def references() -> ReferenceIndex:
    return ReferenceIndex(REFERENCE_DATA)


@pytest.fixture()
def admin() -> Actor:
    return Actor(user_id="1", role=ActorRole.ADMIN)


@pytest.fixture()
def alpha_manager() -> Actor:
    """Platoon-scoped actor bound to platoon id 2 (PLT-A)."""
    return Actor(user_id="2", role=ActorRole.PLATOON_SCOPED, platoon_id=2)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture()
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture()
def service(clock: FakeClock, catalog: FakeCatalog, writer: RecordingWriter) -> BulkImportService:
    limiter = FixedWindowRateLimiter(
        RateLimitConfig(max_requests=5, window_ms=60_000),
        clock_ms=clock,
    )
    return BulkImportService(
        rate_limiter=limiter,
        max_upload_bytes=1024 * 1024,
        catalog_factory=lambda db: catalog,
        writer_factory=lambda db: writer,
    )


@pytest.fixture()
def db() -> Iterator[Session]:
    """In-memory SQLite database seeded with a small reference catalog."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = factory()
    session.add_all(
        [
            Course(id=2, code="MATH-201", title="Advanced Mathematics"),
            Course(id=1, code="CS-101", title="Introduction to Computer Science"),
            Subject(id=10, code="PROG-101", title="Programming Basics"),
            Platoon(id=2, key="PLT-A", name="Alpha Platoon"),
            Platoon(id=5, key="PLT-B", name="Bravo Platoon"),
            Instructor(id=8, name="Prof. Jane Doe", email="jane.doe@example.com"),
            Instructor(id=7, name="Dr. John Smith", email="john.smith@example.com"),
        ]
    )
    session.commit()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


