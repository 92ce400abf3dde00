from __future__ import annotations

from datetime import date

from sqlmodel import SQLModel


class AssignmentCreate(SQLModel):
    # Required fields are checked by the resolver so direct callers get the same errors.
    employee_id: str | None = None
    project_id: str | None = None
    assignment_date: date | None = None
    notes: str | None = None


class AssignmentUpdate(SQLModel):
    employee_id: str | None = None
    project_id: str | None = None
    assignment_date: date | None = None
    notes: str | None = None


class AssignmentRead(SQLModel):
    assignment_id: int
    employee_id: str
    employee_name: str
    project_id: str
    project_name: str
    assignment_date: date
    notes: str | None = None


class WeekSummary(SQLModel):
    week_start: date
    week_end: date
    days: dict[str, dict[str, list[AssignmentRead]]]
    projects: dict[str, dict[str, str | None]]
    employees: dict[str, dict[str, str]]
    total_assignments: int
    unique_employees: int
    unique_projects: int
