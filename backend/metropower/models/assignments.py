from __future__ import annotations

from datetime import date

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class Assignment(SQLModel, table=True):
    __tablename__ = "assignments"
    __table_args__ = (
        UniqueConstraint("employee_id", "assignment_date", name="uq_assignments_employee_id_date"),
        # Keep SQLite from reusing the highest id after a delete.
        {"sqlite_autoincrement": True},
    )

    assignment_id: int | None = Field(default=None, primary_key=True)
    employee_id: str = Field(foreign_key="employees.employee_id", index=True)
    # Names are copied in at creation time and not kept in sync with renames.
    employee_name: str
    project_id: str = Field(foreign_key="projects.project_id", index=True)
    project_name: str
    assignment_date: date = Field(index=True)
    notes: str | None = None
