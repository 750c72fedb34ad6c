"""
app/services/file_decoder.py

Decodes uploaded CSV / Excel bytes into ordered, loosely typed rows.

The decoder performs no validation of cell content: every non-blank data line
becomes one mapping of source header -> raw value, in file order.
"""

from __future__ import annotations

import csv
import io
from pathlib import PurePath
from typing import Any

import pandas as pd

from app.domain.bulk_import import ImportRow
from app.services.import_errors import FileDecodeError, UnsupportedFormatError

CSV_EXTENSIONS = {"csv"}
EXCEL_EXTENSIONS = {"xlsx", "xls"}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS

_EXCEL_ENGINES = {"xlsx": "openpyxl", "xls": "xlrd"}


def file_extension(filename: str) -> str:
    """
    Return the lowercased extension after the last dot, or "" when absent.
    """

    return PurePath(filename.strip()).suffix.lstrip(".").lower()


def decode_upload(content: bytes, filename: str) -> list[ImportRow]:
    """
    Decode file bytes into rows using the strategy implied by the extension.

    Raises:
        UnsupportedFormatError: extension is not csv, xlsx or xls.
        FileDecodeError: the bytes cannot be read as the declared format.
    """

    extension = file_extension(filename)
    if extension in CSV_EXTENSIONS:
        return decode_csv(content)
    if extension in EXCEL_EXTENSIONS:
        return decode_excel(content, extension=extension)
    raise UnsupportedFormatError(
        "Unsupported file format. Please upload CSV or XLSX file."
    )


def decode_csv(content: bytes) -> list[ImportRow]:
    """
    Parse UTF-8 CSV; the first line is the header and empty lines are skipped.
    """

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FileDecodeError("CSV must be UTF-8 encoded.") from exc

    try:
        reader = csv.DictReader(io.StringIO(text, newline=""))
        rows: list[ImportRow] = []
        for raw_row in reader:
            # Cells beyond the header width land under the None key.
            rows.append({key: value for key, value in raw_row.items() if key is not None})
    except csv.Error as exc:
        raise FileDecodeError(f"Invalid CSV format: {exc}") from exc

    return rows


def decode_excel(content: bytes, *, extension: str = "xlsx") -> list[ImportRow]:
    """
    Read the first worksheet; the first row is the header.

    Text cells are kept verbatim ("NA", "null" included); only empty cells
    become None, and rows with no value at all are skipped.
    """

    try:
        frame = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            dtype=object,
            engine=_EXCEL_ENGINES.get(extension),
            keep_default_na=False,
            na_values=[],
        )
    except Exception as exc:  # noqa: BLE001
        raise FileDecodeError(f"Invalid spreadsheet: {exc}") from exc

    rows: list[ImportRow] = []
    for record in frame.to_dict(orient="records"):
        row = {str(header): _clean_cell(value) for header, value in record.items()}
        if any(value is not None for value in row.values()):
            rows.append(row)
    return rows


def _clean_cell(value: Any) -> Any:
    if value is None or (isinstance(value, str) and value == ""):
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value
