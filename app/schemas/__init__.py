"""
app/schemas package marker.
"""

from app.schemas.bulk_upload import (
    BulkUploadRowErrorResponse,
    BulkUploadSummaryResponse,
    RateLimitErrorResponse,
)
from app.schemas.reference_catalog import (
    CourseListResponse,
    CsrfTokenResponse,
    InstructorListResponse,
    PlatoonListResponse,
    SubjectListResponse,
)

__all__ = [
    "BulkUploadRowErrorResponse",
    "BulkUploadSummaryResponse",
    "CourseListResponse",
    "CsrfTokenResponse",
    "InstructorListResponse",
    "PlatoonListResponse",
    "RateLimitErrorResponse",
    "SubjectListResponse",
]
