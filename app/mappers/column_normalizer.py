"""
app/mappers/column_normalizer.py

Maps arbitrary upload header spellings onto the canonical session fields.

Matching is substring containment on a compacted header, tested against the
canonical keywords in a fixed priority order. The first keyword found wins,
so a header such as "CourseSubjectRef" binds to ``course``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence

from app.domain.bulk_import import CanonicalRow

logger = logging.getLogger(__name__)

# (keyword, CanonicalRow attribute) in binding priority order.
HEADER_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("course", "course"),
    ("subject", "subject"),
    ("platoon", "platoon"),
    ("instructor", "instructor"),
    ("planned", "planned_at"),
    ("duration", "duration_min"),
    ("venue", "venue"),
    ("notes", "notes"),
)

_WHITESPACE_RE = re.compile(r"\s+")


def compact_header(header: str) -> str:
    """
    Lowercase, trim and remove all internal whitespace.
    """

    return _WHITESPACE_RE.sub("", str(header).strip().lower())


def matching_fields(header: str) -> list[str]:
    """
    Return every canonical field whose keyword occurs in the header, by priority.
    """

    compacted = compact_header(header)
    return [field for keyword, field in HEADER_KEYWORDS if keyword in compacted]


def normalize_header_key(header: str) -> str | None:
    """
    Return the CanonicalRow attribute a header binds to, or None to drop it.
    """

    matches = matching_fields(header)
    return matches[0] if matches else None


def resolve_headers(headers: Iterable[str]) -> dict[str, str]:
    """
    Bind each recognized header to its canonical field.

    Headers that satisfy more than one keyword keep the priority binding and
    are reported once at WARNING level.
    """

    bindings: dict[str, str] = {}
    for header in headers:
        if header is None or header in bindings:
            continue
        matches = matching_fields(header)
        if not matches:
            logger.debug("Ignoring unrecognized upload header %r", header)
            continue
        if len(matches) > 1:
            logger.warning(
                "Ambiguous upload header %r matches %s; binding to %s",
                header,
                ", ".join(matches),
                matches[0],
            )
        bindings[header] = matches[0]
    return bindings


def normalize_row(
    raw_row: Mapping[str, Any],
    bindings: Mapping[str, str] | None = None,
) -> CanonicalRow:
    """
    Build a CanonicalRow from one decoded row.

    Unknown headers are ignored. When several headers bind to the same field
    the right-most column wins.
    """

    values: dict[str, Any] = {}
    for header, raw_value in raw_row.items():
        if header is None:
            continue
        if bindings is None:
            field_name = normalize_header_key(header)
        else:
            field_name = bindings.get(header)
        if field_name is None:
            continue
        values[field_name] = coerce_cell(raw_value)
    return CanonicalRow(**values)


def normalize_rows(raw_rows: Sequence[Mapping[str, Any]]) -> list[CanonicalRow]:
    """
    Normalize every decoded row, resolving header bindings once per file.
    """

    headers: dict[str, None] = {}
    for raw_row in raw_rows:
        for header in raw_row:
            headers.setdefault(header, None)
    bindings = resolve_headers(headers)
    return [normalize_row(raw_row, bindings) for raw_row in raw_rows]


def coerce_cell(value: Any) -> str | datetime | None:
    """
    Convert a raw cell into trimmed text, keeping spreadsheet datetimes intact.

    Blank cells become None. Integral floats (Excel stores 90 as 90.0) are
    rendered without the fractional part.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, float):
        if value != value:  # NaN
            return None
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text or None
