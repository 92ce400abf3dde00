"""Starter records for the in-memory backend and fresh databases."""

from __future__ import annotations

from datetime import date

from metropower.models import Assignment, Employee, Project
from metropower.services.store import Store


def demo_employees() -> list[Employee]:
    return [
        Employee(
            employee_id="EMP001",
            name="John Smith",
            position="Electrician",
            status="Active",
            employee_number="12345",
            hire_date=date(2024, 1, 15),
            phone="555-0101",
            email="john.smith@metropower.com",
            notes="Experienced electrician",
        ),
        Employee(
            employee_id="EMP002",
            name="Mike Johnson",
            position="Field Supervisor",
            status="Active",
            employee_number="12346",
            hire_date=date(2023, 8, 20),
            phone="555-0102",
            email="mike.johnson@metropower.com",
            notes="Field supervisor with 10 years experience",
        ),
        Employee(
            employee_id="EMP003",
            name="Sarah Davis",
            position="Apprentice",
            status="Active",
            employee_number="12347",
            hire_date=date(2024, 3, 1),
            phone="555-0103",
            email="sarah.davis@metropower.com",
            notes="Second year apprentice",
        ),
        Employee(
            employee_id="EMP004",
            name="Robert Wilson",
            position="Electrician",
            status="PTO",
            employee_number="12348",
            hire_date=date(2023, 11, 10),
            phone="555-0104",
            email="robert.wilson@metropower.com",
            notes="On vacation until next week",
        ),
        Employee(
            employee_id="EMP005",
            name="Lisa Brown",
            position="General Laborer",
            status="Active",
            employee_number="12349",
            hire_date=date(2024, 2, 14),
            phone="555-0105",
            email="lisa.brown@metropower.com",
            notes="General laborer, reliable worker",
        ),
    ]


def demo_projects() -> list[Project]:
    return [
        Project(
            project_id="PROJ-001",
            name="Downtown Office Building",
            number="TB-2025-001",
            status="Active",
            start_date=date(2025, 1, 1),
            end_date=date(2025, 6, 30),
            location="123 Main St, Atlanta, GA",
            description="Electrical installation for new office building",
            budget=250000.0,
        ),
        Project(
            project_id="PROJ-002",
            name="Warehouse Renovation",
            number="TB-2025-002",
            status="Active",
            start_date=date(2025, 2, 1),
            end_date=date(2025, 8, 15),
            location="456 Industrial Blvd, Atlanta, GA",
            description="Complete electrical system upgrade for warehouse facility",
            budget=180000.0,
        ),
        Project(
            project_id="PROJ-003",
            name="Retail Store Chain",
            number="TB-2025-003",
            status="Active",
            start_date=date(2025, 3, 1),
            end_date=date(2025, 9, 30),
            location="Multiple locations, Atlanta Metro",
            description="Electrical work for 5 new retail store locations",
            budget=320000.0,
        ),
    ]


def demo_assignments() -> list[Assignment]:
    day = date(2025, 6, 14)
    rows = [
        ("EMP001", "John Smith", "PROJ-001", "Downtown Office Building", "Working on main electrical panel installation"),
        ("EMP002", "Mike Johnson", "PROJ-001", "Downtown Office Building", "Supervising electrical team"),
        ("EMP003", "Sarah Davis", "PROJ-002", "Warehouse Renovation", "Assisting with conduit installation"),
        ("EMP005", "Lisa Brown", "PROJ-002", "Warehouse Renovation", "Material handling and site cleanup"),
    ]
    return [
        Assignment(
            employee_id=employee_id,
            employee_name=employee_name,
            project_id=project_id,
            project_name=project_name,
            assignment_date=day,
            notes=notes,
        )
        for employee_id, employee_name, project_id, project_name, notes in rows
    ]


def seed_store(store: Store) -> bool:
    """Load the demo records into an empty store. Returns False if it already has data."""
    with store.transaction():
        if store.employees.count() or store.projects.count() or store.assignments.count():
            return False
        for employee in demo_employees():
            store.employees.insert(employee)
        for project in demo_projects():
            store.projects.insert(project)
        for assignment in demo_assignments():
            assignment.assignment_id = store.assignments.allocate_id()
            store.assignments.insert(assignment)
    return True
