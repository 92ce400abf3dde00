from __future__ import annotations

from datetime import date

from sqlmodel import Field, SQLModel


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    project_id: str = Field(primary_key=True, max_length=50)
    name: str = Field(index=True)
    number: str | None = None
    status: str = Field(default="Active")  # Active | Completed | On Hold | Planned
    start_date: date | None = None
    end_date: date | None = None

    location: str | None = None
    description: str | None = None
    budget: float | None = None
