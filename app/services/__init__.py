"""
app/services package marker.
"""

from app.services.import_errors import (
    BulkImportError,
    FileDecodeError,
    FileTooLargeError,
    MissingFileError,
    RateLimitExceededError,
    UnsupportedFormatError,
)
from app.services.rate_limiter import FixedWindowRateLimiter, RateLimitConfig, RateLimitResult
from app.services.reference_index import ReferenceIndex
from app.services.bulk_import_service import BulkImportService, get_bulk_import_service

__all__ = [
    "BulkImportError",
    "BulkImportService",
    "FileDecodeError",
    "FileTooLargeError",
    "FixedWindowRateLimiter",
    "MissingFileError",
    "RateLimitConfig",
    "RateLimitExceededError",
    "RateLimitResult",
    "ReferenceIndex",
    "UnsupportedFormatError",
    "get_bulk_import_service",
]
