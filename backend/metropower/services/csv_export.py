"""Tabular export helpers: CSV text and XLSX workbooks from uniform records."""

from __future__ import annotations

import io
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any, Final

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from metropower.core.errors import SerializationError

Record = Mapping[str, Any]

_MAX_COLUMN_WIDTH: Final[int] = 50
_HEADER_FILL: Final[str] = "FFE6E6FA"
_NEEDS_QUOTING: Final[tuple[str, ...]] = (",", '"', "\n", "\r")


def _quote(text: str) -> str:
    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        # lowercase, as in the JSON export
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return _quote(str(value))


def infer_headers(records: Sequence[Record]) -> list[str]:
    """Field names of the first record, in iteration order."""
    if not records:
        return []
    return list(records[0].keys())


def _check_uniform(records: Sequence[Record], headers: list[str]) -> None:
    expected = set(headers)
    for index, record in enumerate(records):
        if set(record.keys()) != expected:
            raise SerializationError(
                f"Record {index} fields {sorted(record.keys())} do not match header {headers}"
            )


def to_csv(records: Sequence[Record], *, strict: bool = False) -> str:
    """Serialize records to CSV text.

    The header comes from the first record. Missing fields in later records are
    written as empty cells and extra fields are dropped; pass ``strict=True`` to
    raise ``SerializationError`` instead. An empty input yields ``""``. Rows are
    separated by ``\\n`` with no trailing newline.
    """
    if not records:
        return ""
    headers = infer_headers(records)
    if strict:
        _check_uniform(records, headers)

    lines = [",".join(_quote(field) for field in headers)]
    for record in records:
        lines.append(",".join(_format_value(record.get(field)) for field in headers))
    return "\n".join(lines)


def _cell_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (str, int, float, bool, date, datetime)):
        return value
    return str(value)


def to_xlsx(records: Sequence[Record], *, sheet_name: str = "Data") -> bytes:
    """Render records into a single-sheet workbook and return the file bytes."""
    wb = Workbook()
    ws = wb.active
    # Excel caps sheet titles at 31 characters.
    ws.title = sheet_name[:31]

    headers = infer_headers(records)
    if headers:
        ws.append(headers)
        for cell in ws[1]:
            cell.font = Font(bold=True)
            cell.fill = PatternFill(start_color=_HEADER_FILL, end_color=_HEADER_FILL, fill_type="solid")
    for record in records:
        ws.append([_cell_value(record.get(field)) for field in headers])

    for col_idx, field in enumerate(headers, start=1):
        longest = len(field)
        for record in records:
            value = record.get(field)
            longest = max(longest, len(str(value)) if value is not None else 0)
        ws.column_dimensions[get_column_letter(col_idx)].width = min(longest + 2, _MAX_COLUMN_WIDTH)

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()
