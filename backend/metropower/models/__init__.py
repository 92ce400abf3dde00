from metropower.models.assignments import Assignment
from metropower.models.org import Employee
from metropower.models.projects import Project

__all__ = [
    "Assignment",
    "Employee",
    "Project",
]
