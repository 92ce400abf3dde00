"""Scheduling views: filtered assignment lists, the Monday–Friday week summary, availability."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from typing import Final

from metropower.models import Assignment, Employee, Project
from metropower.schemas.assignments import AssignmentRead, WeekSummary

WORK_DAYS: Final[tuple[str, ...]] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")


def filter_assignments(
    assignments: Iterable[Assignment],
    *,
    start_date: date | None = None,
    end_date: date | None = None,
    employee_id: str | None = None,
    project_id: str | None = None,
) -> list[Assignment]:
    """Filter by inclusive date range and ids, ordered by date, project name, employee name."""
    selected = [
        a
        for a in assignments
        if (start_date is None or a.assignment_date >= start_date)
        and (end_date is None or a.assignment_date <= end_date)
        and (employee_id is None or a.employee_id == employee_id)
        and (project_id is None or a.project_id == project_id)
    ]
    selected.sort(key=lambda a: (a.assignment_date, a.project_name, a.employee_name))
    return selected


def unassigned_employees(
    employees: Iterable[Employee],
    assignments: Iterable[Assignment],
    on: date,
) -> list[Employee]:
    """Active employees with no assignment on ``on``, ordered by name."""
    busy = {a.employee_id for a in assignments if a.assignment_date == on}
    free = [e for e in employees if e.status == "Active" and e.employee_id not in busy]
    free.sort(key=lambda e: e.name)
    return free


def active_projects(projects: Iterable[Project]) -> list[Project]:
    return sorted((p for p in projects if p.status == "Active"), key=lambda p: p.name)


def week_bounds(week_start: date) -> tuple[date, date]:
    # A start date in the middle of the week snaps back to its Monday.
    monday = week_start - timedelta(days=week_start.weekday())
    return monday, monday + timedelta(days=len(WORK_DAYS) - 1)


def build_week_summary(assignments: Iterable[Assignment], week_start: date) -> WeekSummary:
    start, end = week_bounds(week_start)
    in_week = filter_assignments(assignments, start_date=start, end_date=end)

    days: dict[str, dict[str, list[AssignmentRead]]] = {day: {} for day in WORK_DAYS}
    projects: dict[str, dict[str, str | None]] = {}
    employees: dict[str, dict[str, str]] = {}
    for assignment in in_week:
        day_name = WORK_DAYS[assignment.assignment_date.weekday()]
        days[day_name].setdefault(assignment.project_id, []).append(
            AssignmentRead.model_validate(assignment, from_attributes=True)
        )
        projects.setdefault(
            assignment.project_id,
            {"project_id": assignment.project_id, "name": assignment.project_name},
        )
        employees.setdefault(
            assignment.employee_id,
            {"employee_id": assignment.employee_id, "name": assignment.employee_name},
        )

    return WeekSummary(
        week_start=start,
        week_end=end,
        days=days,
        projects=projects,
        employees=employees,
        total_assignments=len(in_week),
        unique_employees=len(employees),
        unique_projects=len(projects),
    )
