from __future__ import annotations

from datetime import date
from typing import Literal

from sqlmodel import SQLModel

EmployeeStatus = Literal["Active", "PTO", "Leave", "Military", "Terminated"]


class EmployeeCreate(SQLModel):
    employee_id: str | None = None
    name: str
    position: str | None = None
    # Legacy forms send a numeric position id instead of the position name.
    position_id: str | None = None
    status: EmployeeStatus = "Active"
    employee_number: str | None = None
    hire_date: date | None = None

    phone: str | None = None
    email: str | None = None
    notes: str | None = None


class EmployeeUpdate(SQLModel):
    name: str | None = None
    position: str | None = None
    status: EmployeeStatus | None = None
    employee_number: str | None = None
    hire_date: date | None = None

    phone: str | None = None
    email: str | None = None
    notes: str | None = None


class EmployeeRead(SQLModel):
    employee_id: str
    name: str
    position: str | None = None
    status: str
    employee_number: str | None = None
    hire_date: date | None = None
    phone: str | None = None
    email: str | None = None
    notes: str | None = None
