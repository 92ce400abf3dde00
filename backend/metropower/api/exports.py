from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Query, Response

from metropower.api.deps import STORE_DEP
from metropower.core.errors import ValidationError
from metropower.core.logging import get_logger
from metropower.services.csv_export import to_csv, to_xlsx
from metropower.services.exports import EXPORT_FORMATS, export_filename, export_records
from metropower.services.store import Store

router = APIRouter(tags=["exports"])
logger = get_logger(__name__)

FORMAT_QUERY = Query(default="csv", alias="format")
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/export-{export_type}", response_model=None)
def export_data(
    export_type: str,
    export_format: str = FORMAT_QUERY,
    store: Store = STORE_DEP,
) -> Response | dict[str, Any]:
    if export_format not in EXPORT_FORMATS:
        raise ValidationError(f"Unsupported export format: {export_format}")
    records = export_records(store, export_type)
    logger.info("export.generated type=%s format=%s count=%s", export_type, export_format, len(records))

    if export_format == "csv":
        return Response(
            content=to_csv(records),
            media_type="text/csv",
            headers=_attachment(export_filename(export_type, "csv")),
        )
    if export_format == "excel":
        return Response(
            content=to_xlsx(records, sheet_name=export_type.capitalize()),
            media_type=XLSX_MEDIA_TYPE,
            headers=_attachment(export_filename(export_type, "xlsx")),
        )
    return {
        "success": True,
        "data": records,
        "type": export_type,
        "format": export_format,
        "count": len(records),
    }
