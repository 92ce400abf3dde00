"""Employee and project create/update against a store."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from metropower.core.errors import ValidationError
from metropower.models import Employee, Project
from metropower.services.store import Repository

# Legacy position ids sent by the manager forms.
POSITIONS_BY_ID: Final[dict[str, str]] = {
    "1": "Electrician",
    "2": "Field Supervisor",
    "3": "Apprentice",
    "4": "General Laborer",
    "5": "Temp",
}
UNKNOWN_POSITION: Final[str] = "Unknown"
# Columns that may be omitted from an update but never cleared.
NON_NULLABLE_FIELDS: Final[tuple[str, ...]] = ("name", "status")


def resolve_position(position: str | None, position_id: str | None) -> str | None:
    if position:
        return position
    if position_id is None:
        return None
    return POSITIONS_BY_ID.get(str(position_id), UNKNOWN_POSITION)


def _require_name(data: Mapping[str, Any]) -> str:
    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Missing required fields: name")
    return name


def _reject_nulls(updates: Mapping[str, Any], fields: tuple[str, ...]) -> None:
    nulled = [field for field in fields if field in updates and updates[field] is None]
    if nulled:
        raise ValidationError(f"Fields cannot be null: {', '.join(nulled)}")


def create_employee(data: Mapping[str, Any], employees: Repository[Employee]) -> Employee:
    """Insert a new employee, synthesizing ``employee_id`` when none is given."""
    fields = {k: v for k, v in data.items() if k not in {"employee_id", "position_id", "position"}}
    fields["name"] = _require_name(data)
    fields["position"] = resolve_position(data.get("position"), data.get("position_id"))
    employee = Employee(employee_id=data.get("employee_id") or employees.allocate_id(), **fields)
    return employees.insert(employee)


def update_employee(
    employee_id: str,
    changes: Mapping[str, Any],
    employees: Repository[Employee],
) -> Employee:
    updates = dict(changes)
    _reject_nulls(updates, NON_NULLABLE_FIELDS)
    if "name" in updates:
        updates["name"] = _require_name(updates)
    return employees.update(employee_id, updates)


def create_project(data: Mapping[str, Any], projects: Repository[Project]) -> Project:
    """Insert a new project, synthesizing ``project_id`` when none is given."""
    fields = {k: v for k, v in data.items() if k != "project_id"}
    fields["name"] = _require_name(data)
    start, end = fields.get("start_date"), fields.get("end_date")
    if start and end and end < start:
        raise ValidationError("end_date must not be before start_date")
    project = Project(project_id=data.get("project_id") or projects.allocate_id(), **fields)
    return projects.insert(project)


def update_project(
    project_id: str,
    changes: Mapping[str, Any],
    projects: Repository[Project],
) -> Project:
    updates = dict(changes)
    _reject_nulls(updates, NON_NULLABLE_FIELDS)
    if "name" in updates:
        updates["name"] = _require_name(updates)
    current = projects.require(project_id)
    start = updates.get("start_date", current.start_date)
    end = updates.get("end_date", current.end_date)
    if start and end and end < start:
        raise ValidationError("end_date must not be before start_date")
    return projects.update(project_id, updates)
