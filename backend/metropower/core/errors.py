"""Error taxonomy raised by services and mapped to HTTP responses by the app."""

from __future__ import annotations

from fastapi import status


class MetroPowerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    title: str = "Internal server error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MetroPowerError):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation error"


class NotFoundError(MetroPowerError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not found"


class ConflictError(MetroPowerError):
    status_code = status.HTTP_409_CONFLICT
    title = "Conflict error"


class DuplicateAssignmentError(ConflictError):
    def __init__(self, employee_id: str, assignment_date: object) -> None:
        super().__init__(f"Employee {employee_id} is already assigned on {assignment_date}")
        self.employee_id = employee_id
        self.assignment_date = assignment_date


class DuplicateRecordError(ConflictError):
    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity.capitalize()} {key} already exists")
        self.entity = entity
        self.key = key


class SerializationError(MetroPowerError):
    title = "Serialization error"


class UnauthorizedError(MetroPowerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Unauthorized"
