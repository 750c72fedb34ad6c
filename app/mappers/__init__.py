"""
app/mappers package marker.
"""

from app.mappers.column_normalizer import (
    HEADER_KEYWORDS,
    normalize_header_key,
    normalize_row,
    normalize_rows,
    resolve_headers,
)

__all__ = [
    "HEADER_KEYWORDS",
    "normalize_header_key",
    "normalize_row",
    "normalize_rows",
    "resolve_headers",
]
