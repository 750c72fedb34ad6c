"""
app/services/bulk_import_service.py

Service layer for session bulk imports.

One call runs: rate-limit gate -> file presence -> decode -> header
normalization -> one reference snapshot -> sequential per-row validation and
persistence -> aggregate report.

Only the gate, a missing/oversized file, an unsupported format or a decode
failure abort the call. Every other problem is recorded against its row and
the remaining rows still run. Rows committed before a failure stay
committed; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Protocol

from sqlalchemy.orm import Session

from app.config import get_bulk_import_settings
from app.domain.bulk_import import Actor, ImportReport, RowImportError, SessionDraft
from app.logging_utils import log_event
from app.mappers.column_normalizer import normalize_rows
from app.repositories.reference_repository import ReferenceRepository
from app.repositories.session_repository import SessionRepository
from app.services.file_decoder import decode_upload, file_extension
from app.services.import_errors import (
    FileTooLargeError,
    MissingFileError,
    RateLimitExceededError,
)
from app.services.rate_limiter import (
    FixedWindowRateLimiter,
    InMemoryRateLimitStore,
    RateLimitConfig,
)
from app.services.reference_index import ReferenceCatalog, ReferenceIndex
from app.validators.session_row_validator import RejectedRow, SessionRowValidator

logger = logging.getLogger(__name__)

RATE_LIMIT_OPERATION = "bulk-upload"

# Row 1 of the file is the header and display numbering is 1-based.
ROW_NUMBER_OFFSET = 2


class SessionWriter(Protocol):
    def create_session(self, draft: SessionDraft) -> Any:
        ...


def rate_limit_key(actor: Actor) -> str:
    return f"{RATE_LIMIT_OPERATION}:{actor.user_id}"


class BulkImportService:
    """
    Coordinates decoding, normalization, validation and persistence of uploads.
    """

    def __init__(
        self,
        *,
        rate_limiter: FixedWindowRateLimiter,
        max_upload_bytes: int,
        log_row_errors: bool = True,
        validator: SessionRowValidator | None = None,
        catalog_factory: Callable[[Session], ReferenceCatalog] | None = None,
        writer_factory: Callable[[Session], SessionWriter] | None = None,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._max_upload_bytes = max(1, max_upload_bytes)
        self._log_row_errors = log_row_errors
        self._validator = validator or SessionRowValidator()
        self._catalog_factory = catalog_factory or ReferenceRepository
        self._writer_factory = writer_factory or SessionRepository

    @property
    def rate_limiter(self) -> FixedWindowRateLimiter:
        return self._rate_limiter

    def import_sessions(
        self,
        *,
        content: bytes | None,
        filename: str | None,
        actor: Actor,
        db: Session,
    ) -> ImportReport:
        """
        Import every row of one uploaded file and report per-row outcomes.

        Args:
            content:  Raw file bytes; None or empty means no file was sent.
            filename: Client filename; its extension selects the decoder.
            actor:    Authenticated caller; drives rate limiting and platoon scope.
            db:       Active SQLAlchemy session (caller owns lifecycle).

        Raises:
            RateLimitExceededError, MissingFileError, FileTooLargeError,
            UnsupportedFormatError, FileDecodeError.
        """

        key = rate_limit_key(actor)
        limit = self._rate_limiter.check(key)
        if not limit.allowed:
            log_event(
                logger,
                logging.WARNING,
                "bulk_import.rate_limited",
                key=key,
                reset_at_ms=limit.reset_at_ms,
            )
            raise RateLimitExceededError(limit)

        if not content or not filename:
            raise MissingFileError("No file provided")
        if len(content) > self._max_upload_bytes:
            raise FileTooLargeError("Uploaded file exceeds configured size limit.")

        raw_rows = decode_upload(content, filename)
        rows = normalize_rows(raw_rows)
        references = ReferenceIndex.load(self._catalog_factory(db))
        writer = self._writer_factory(db)

        log_event(
            logger,
            logging.INFO,
            "bulk_import.started",
            user_id=actor.user_id,
            format=file_extension(filename),
            rows=len(rows),
            reference_entities=len(references),
        )

        success = 0
        errors: list[RowImportError] = []
        for index, row in enumerate(rows):
            row_number = index + ROW_NUMBER_OFFSET
            outcome = self._validator.validate(row, actor=actor, references=references)
            if isinstance(outcome, RejectedRow):
                self._record_error(errors, RowImportError(row=row_number, error=outcome.reason))
                continue

            try:
                writer.create_session(outcome.draft)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Bulk import row %s could not be persisted", row_number)
                self._record_error(
                    errors,
                    RowImportError(row=row_number, error=str(exc) or "Unknown error"),
                )
                continue
            success += 1

        report = ImportReport(success=success, failed=len(errors), errors=errors)
        log_event(
            logger,
            logging.INFO,
            "bulk_import.finished",
            user_id=actor.user_id,
            success=report.success,
            failed=report.failed,
        )
        return report

    def _record_error(self, errors: list[RowImportError], error: RowImportError) -> None:
        if self._log_row_errors:
            logger.warning("Bulk import row=%s rejected: %s", error.row, error.error)
        errors.append(error)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_bulk_import_service() -> BulkImportService:
    """
    Build and cache the import service; its limiter state lives for the process.
    """

    settings = get_bulk_import_settings()
    limiter = FixedWindowRateLimiter(
        RateLimitConfig(
            max_requests=settings.rate_limit_max_requests,
            window_ms=settings.rate_limit_window_ms,
        ),
        store=InMemoryRateLimitStore(max_keys=settings.rate_limit_max_keys),
    )
    return BulkImportService(
        rate_limiter=limiter,
        max_upload_bytes=settings.max_upload_bytes,
        log_row_errors=settings.log_row_errors,
    )
