"""
app/schemas/bulk_upload.py

Response schemas for the session bulk-upload endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BulkUploadRowErrorResponse(BaseModel):
    """
    One failed upload row.
    """

    row: int = Field(..., ge=2)
    error: str


class BulkUploadSummaryResponse(BaseModel):
    """
    Partial-success report for one upload.
    """

    success: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    errors: list[BulkUploadRowErrorResponse] = Field(default_factory=list)


class RateLimitErrorResponse(BaseModel):
    error: str
    resetAt: int = Field(..., description="Epoch milliseconds when the window resets")
