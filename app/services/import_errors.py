"""
app/services/import_errors.py

Request-level failures of the session bulk-import flow.

Each of these aborts the whole import call; row-level problems never raise
and are reported in the ImportReport instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.services.rate_limiter import RateLimitResult


class BulkImportError(Exception):
    """Base exception for request-level bulk import failures."""


class MissingFileError(BulkImportError):
    """Raised when no file, or an empty file, was uploaded."""


class FileTooLargeError(BulkImportError):
    """Raised when the upload exceeds the configured size limit."""


class UnsupportedFormatError(BulkImportError):
    """Raised when the file extension is not csv, xlsx or xls."""


class FileDecodeError(BulkImportError):
    """Raised when a supported file cannot be decoded into rows."""


class RateLimitExceededError(BulkImportError):
    """
    Raised when the actor has exhausted the import quota for the window.
    """

    def __init__(self, result: RateLimitResult) -> None:
        super().__init__("Rate limit exceeded")
        self.result = result
