"""Assignment creation, update and deletion against a store.

These functions do no logging and no I/O of their own; whatever the
repositories do is the only side effect. Callers wrap them in
``Store.transaction()`` so the duplicate check and the insert are not
interleaved with another writer.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Final, Literal

from metropower.core.errors import DuplicateAssignmentError, NotFoundError, ValidationError
from metropower.models import Assignment, Employee, Project
from metropower.services.store import Repository

UNKNOWN_EMPLOYEE: Final[str] = "Unknown Employee"
UNKNOWN_PROJECT: Final[str] = "Unknown Project"

REQUIRED_FIELDS: Final[tuple[str, ...]] = ("employee_id", "project_id", "assignment_date")
UPDATABLE_FIELDS: Final[frozenset[str]] = frozenset(
    {"employee_id", "project_id", "assignment_date", "notes"}
)

DuplicatePolicy = Literal["reject", "ignore"]


@dataclass(frozen=True, slots=True)
class ResolverOptions:
    # strict: unknown references raise NotFoundError; otherwise sentinel names are used.
    strict_references: bool = True
    duplicate_policy: DuplicatePolicy = "reject"


DEFAULT_OPTIONS = ResolverOptions()


_DATE_RE: Final[re.Pattern[str]] = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_assignment_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _DATE_RE.match(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError("assignment_date must be in YYYY-MM-DD format")


def _missing_fields(request: Mapping[str, Any]) -> list[str]:
    return [field for field in REQUIRED_FIELDS if not request.get(field)]


def resolve_employee_name(
    employees: Repository[Employee],
    employee_id: str,
    *,
    strict: bool,
) -> str:
    employee = employees.get(employee_id)
    if employee is None:
        if strict:
            raise NotFoundError(f"Employee with ID {employee_id} not found")
        return UNKNOWN_EMPLOYEE
    if strict and employee.status == "Terminated":
        raise ValidationError(f"Cannot assign terminated employee (ID: {employee_id})")
    return employee.name


def resolve_project_name(
    projects: Repository[Project],
    project_id: str,
    *,
    strict: bool,
) -> str:
    project = projects.get(project_id)
    if project is None:
        if strict:
            raise NotFoundError(f"Project with ID {project_id} not found")
        return UNKNOWN_PROJECT
    if strict and project.status == "Completed":
        raise ValidationError(f"Cannot assign to completed project (ID: {project_id})")
    return project.name


def find_conflict(
    assignments: Repository[Assignment],
    employee_id: str,
    assignment_date: date,
    *,
    exclude_id: int | None = None,
) -> Assignment | None:
    for existing in assignments.find(employee_id=employee_id, assignment_date=assignment_date):
        if exclude_id is None or existing.assignment_id != exclude_id:
            return existing
    return None


def create_assignment(
    request: Mapping[str, Any],
    employees: Repository[Employee],
    projects: Repository[Project],
    assignments: Repository[Assignment],
    *,
    options: ResolverOptions = DEFAULT_OPTIONS,
) -> Assignment:
    """Resolve ``request`` into a new assignment and insert it.

    Employee and project names are copied onto the assignment. A second
    assignment for the same employee and date raises
    ``DuplicateAssignmentError`` under the ``"reject"`` policy; under
    ``"ignore"`` the existing assignment is returned and nothing is inserted.
    """
    missing = _missing_fields(request)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    employee_id = str(request["employee_id"])
    project_id = str(request["project_id"])
    assignment_date = parse_assignment_date(request["assignment_date"])

    employee_name = resolve_employee_name(employees, employee_id, strict=options.strict_references)
    project_name = resolve_project_name(projects, project_id, strict=options.strict_references)

    existing = find_conflict(assignments, employee_id, assignment_date)
    if existing is not None:
        if options.duplicate_policy == "ignore":
            return existing
        raise DuplicateAssignmentError(employee_id, assignment_date.isoformat())

    assignment = Assignment(
        assignment_id=assignments.allocate_id(),
        employee_id=employee_id,
        employee_name=employee_name,
        project_id=project_id,
        project_name=project_name,
        assignment_date=assignment_date,
        notes=request.get("notes") or None,
    )
    return assignments.insert(assignment)


def update_assignment(
    assignment_id: int,
    changes: Mapping[str, Any],
    employees: Repository[Employee],
    projects: Repository[Project],
    assignments: Repository[Assignment],
    *,
    options: ResolverOptions = DEFAULT_OPTIONS,
) -> Assignment:
    current = assignments.get(assignment_id)
    if current is None:
        raise NotFoundError("Assignment not found")

    updates = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}
    if not updates:
        raise ValidationError("No valid fields to update")

    if "assignment_date" in updates:
        updates["assignment_date"] = parse_assignment_date(updates["assignment_date"])

    employee_id = updates.get("employee_id", current.employee_id)
    if employee_id != current.employee_id:
        updates["employee_name"] = resolve_employee_name(
            employees, employee_id, strict=options.strict_references
        )
    if updates.get("project_id", current.project_id) != current.project_id:
        updates["project_name"] = resolve_project_name(
            projects, updates["project_id"], strict=options.strict_references
        )

    assignment_date = updates.get("assignment_date", current.assignment_date)
    if employee_id != current.employee_id or assignment_date != current.assignment_date:
        if find_conflict(assignments, employee_id, assignment_date, exclude_id=assignment_id):
            raise DuplicateAssignmentError(employee_id, assignment_date.isoformat())

    return assignments.update(assignment_id, updates)


def delete_assignment(assignment_id: int, assignments: Repository[Assignment]) -> None:
    if assignments.get(assignment_id) is None:
        raise NotFoundError("Assignment not found")
    assignments.delete(assignment_id)
