"""
app/api/routers/bulk_upload.py

Session bulk-upload HTTP endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.dependencies import require_csrf
from app.domain.bulk_import import Actor
from app.schemas.bulk_upload import (
    BulkUploadRowErrorResponse,
    BulkUploadSummaryResponse,
    RateLimitErrorResponse,
)
from app.services.bulk_import_service import BulkImportService, get_bulk_import_service
from app.services.import_errors import (
    FileDecodeError,
    FileTooLargeError,
    MissingFileError,
    RateLimitExceededError,
    UnsupportedFormatError,
)
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post(
    "/bulk-upload",
    response_model=BulkUploadSummaryResponse,
    responses={status.HTTP_429_TOO_MANY_REQUESTS: {"model": RateLimitErrorResponse}},
)
def bulk_upload_sessions(
    file: UploadFile | None = File(default=None),
    actor: Actor = Depends(require_csrf),
    db: Session = Depends(get_db),
    import_service: BulkImportService = Depends(get_bulk_import_service),
) -> Response | BulkUploadSummaryResponse:
    """
    Create sessions from an uploaded CSV / XLSX / XLS file.

    Rows are imported independently; the response lists every failed row.
    """

    try:
        content = file.file.read() if file is not None else None
        report = import_service.import_sessions(
            content=content,
            filename=file.filename if file is not None else None,
            actor=actor,
            db=db,
        )
    except RateLimitExceededError as exc:
        limit = exc.result
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=RateLimitErrorResponse(
                error="Rate limit exceeded",
                resetAt=limit.reset_at_ms,
            ).model_dump(),
            headers={
                "X-RateLimit-Remaining": str(limit.remaining),
                "X-RateLimit-Reset": str(limit.reset_at_ms),
            },
        )
    except (MissingFileError, UnsupportedFormatError, FileTooLargeError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except FileDecodeError as exc:
        logger.error("Bulk upload decode failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to read uploaded file.",
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("Bulk upload failed outside the row loop")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from exc
    finally:
        if file is not None:
            file.file.close()

    return BulkUploadSummaryResponse(
        success=report.success,
        failed=report.failed,
        errors=[
            BulkUploadRowErrorResponse(row=error.row, error=error.error)
            for error in report.errors
        ],
    )
