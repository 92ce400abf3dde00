"""Export payloads for the ``/export-{type}`` endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any, Final

from metropower.core.errors import ValidationError
from metropower.services.store import Store

EXPORT_TYPES: Final[tuple[str, ...]] = ("employees", "projects", "assignments")
EXPORT_FORMATS: Final[tuple[str, ...]] = ("csv", "json", "excel")


def export_records(store: Store, export_type: str) -> list[dict[str, Any]]:
    repositories = {
        "employees": store.employees,
        "projects": store.projects,
        "assignments": store.assignments,
    }
    repository = repositories.get(export_type)
    if repository is None:
        raise ValidationError("Invalid export type")
    return [record.model_dump() for record in repository.list()]


def export_filename(export_type: str, extension: str, *, today: date | None = None) -> str:
    stamp = (today or date.today()).isoformat()
    return f"{export_type}_{stamp}.{extension}"
