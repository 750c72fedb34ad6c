"""
app/api/routers/reference_catalog.py

Read-only listings of the reference catalogs used by uploads.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.repositories.reference_repository import ReferenceRepository
from app.schemas.reference_catalog import (
    CourseListResponse,
    CourseResponse,
    InstructorListResponse,
    InstructorResponse,
    PlatoonListResponse,
    PlatoonResponse,
    SubjectListResponse,
    SubjectResponse,
)
from db.session import get_db

router = APIRouter(prefix="/api/v1", tags=["reference"])


@router.get("/courses", response_model=CourseListResponse)
def list_courses(db: Session = Depends(get_db)) -> CourseListResponse:
    rows = ReferenceRepository(db).list_courses()
    return CourseListResponse(courses=[CourseResponse.model_validate(row) for row in rows])


@router.get("/subjects", response_model=SubjectListResponse)
def list_subjects(db: Session = Depends(get_db)) -> SubjectListResponse:
    rows = ReferenceRepository(db).list_subjects()
    return SubjectListResponse(subjects=[SubjectResponse.model_validate(row) for row in rows])


@router.get("/platoons", response_model=PlatoonListResponse)
def list_platoons(db: Session = Depends(get_db)) -> PlatoonListResponse:
    rows = ReferenceRepository(db).list_platoons()
    return PlatoonListResponse(platoons=[PlatoonResponse.model_validate(row) for row in rows])


@router.get("/instructors", response_model=InstructorListResponse)
def list_instructors(db: Session = Depends(get_db)) -> InstructorListResponse:
    rows = ReferenceRepository(db).list_instructors()
    return InstructorListResponse(
        instructors=[InstructorResponse.model_validate(row) for row in rows]
    )
