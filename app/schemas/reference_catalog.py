"""
app/schemas/reference_catalog.py

Read models for reference catalog listings and CSRF token issuance.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    title: str


class SubjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    title: str


class PlatoonResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    name: str


class InstructorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class CourseListResponse(BaseModel):
    courses: list[CourseResponse]


class SubjectListResponse(BaseModel):
    subjects: list[SubjectResponse]


class PlatoonListResponse(BaseModel):
    platoons: list[PlatoonResponse]


class InstructorListResponse(BaseModel):
    instructors: list[InstructorResponse]


class CsrfTokenResponse(BaseModel):
    csrfToken: str
