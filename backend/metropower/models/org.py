from __future__ import annotations

from datetime import date

from sqlmodel import Field, SQLModel


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    employee_id: str = Field(primary_key=True, max_length=50)
    name: str = Field(index=True)
    position: str | None = None
    status: str = Field(default="Active")  # Active | PTO | Leave | Military | Terminated
    employee_number: str | None = Field(default=None, index=True)
    hire_date: date | None = None

    phone: str | None = None
    email: str | None = None
    notes: str | None = None
