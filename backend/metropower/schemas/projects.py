from __future__ import annotations

from datetime import date
from typing import Literal

from sqlmodel import SQLModel

ProjectStatus = Literal["Active", "Completed", "On Hold", "Planned"]


class ProjectCreate(SQLModel):
    project_id: str | None = None
    name: str
    number: str | None = None
    status: ProjectStatus = "Active"
    start_date: date | None = None
    end_date: date | None = None
    location: str | None = None
    description: str | None = None
    budget: float | None = None


class ProjectUpdate(SQLModel):
    name: str | None = None
    number: str | None = None
    status: ProjectStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    location: str | None = None
    description: str | None = None
    budget: float | None = None


class ProjectRead(SQLModel):
    project_id: str
    name: str
    number: str | None = None
    status: str
    start_date: date | None = None
    end_date: date | None = None
    location: str | None = None
    description: str | None = None
    budget: float | None = None
