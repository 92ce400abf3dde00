"""Repository interface over employees, projects and assignments.

Services receive a ``Store`` and never touch module-level state. Two
implementations exist: ``InMemoryStore`` for the single-process demo backend
and tests, and ``SqlStore`` for a SQLModel session.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, col, select

from metropower.core.errors import (
    ConflictError,
    DuplicateAssignmentError,
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)
from metropower.core.logging import get_logger
from metropower.models import Assignment, Employee, Project
from metropower.services.identifiers import (
    EMPLOYEE_ID_PREFIX,
    PROJECT_ID_PREFIX,
    first_free_id,
    next_employee_id,
    next_project_id,
    random_id,
)

ModelT = TypeVar("ModelT", bound=SQLModel)

logger = get_logger(__name__)


class Repository(ABC, Generic[ModelT]):
    """Capability set the services rely on for one entity type."""

    entity: str
    key_field: str

    @abstractmethod
    def get(self, key: Any) -> ModelT | None: ...

    @abstractmethod
    def list(self) -> list[ModelT]: ...

    @abstractmethod
    def find(self, **criteria: Any) -> list[ModelT]: ...

    @abstractmethod
    def insert(self, record: ModelT) -> ModelT: ...

    @abstractmethod
    def update(self, key: Any, changes: Mapping[str, Any]) -> ModelT: ...

    @abstractmethod
    def delete(self, key: Any) -> None: ...

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def allocate_id(self) -> Any | None:
        """Next identifier for a new record, or None when the backend assigns it."""

    def require(self, key: Any) -> ModelT:
        record = self.get(key)
        if record is None:
            raise NotFoundError(f"{self.entity.capitalize()} {key} not found")
        return record

    def key_of(self, record: ModelT) -> Any:
        return getattr(record, self.key_field)


class HighWaterSequence:
    """Integer ids as ``max(existing) + 1`` that are never handed out twice.

    The last issued value is remembered so deleting the newest record does not
    make its id available again.
    """

    def __init__(self) -> None:
        self._last = 0

    def __call__(self, existing: list[int]) -> int:
        self._last = max(self._last, max(existing, default=0)) + 1
        return self._last


class InMemoryRepository(Repository[ModelT]):
    def __init__(
        self,
        entity: str,
        key_field: str,
        records: list[ModelT] | None = None,
        *,
        id_factory: Callable[[list[ModelT]], Any] | None = None,
    ) -> None:
        self.entity = entity
        self.key_field = key_field
        # The caller owns this list; inserts append to it in place.
        self._records = records if records is not None else []
        self._id_factory = id_factory

    def get(self, key: Any) -> ModelT | None:
        for record in self._records:
            if self.key_of(record) == key:
                return record
        return None

    def list(self) -> list[ModelT]:
        return list(self._records)

    def find(self, **criteria: Any) -> list[ModelT]:
        return [
            record
            for record in self._records
            if all(getattr(record, field) == value for field, value in criteria.items())
        ]

    def insert(self, record: ModelT) -> ModelT:
        key = self.key_of(record)
        if key is not None and self.get(key) is not None:
            raise DuplicateRecordError(self.entity, key)
        self._records.append(record)
        return record

    def update(self, key: Any, changes: Mapping[str, Any]) -> ModelT:
        record = self.require(key)
        for field, value in changes.items():
            setattr(record, field, value)
        return record

    def delete(self, key: Any) -> None:
        record = self.require(key)
        self._records.remove(record)

    def count(self) -> int:
        return len(self._records)

    def allocate_id(self) -> Any | None:
        if self._id_factory is None:
            return None
        return self._id_factory(self._records)


class SqlRepository(Repository[ModelT]):
    def __init__(
        self,
        session: Session,
        model: type[ModelT],
        entity: str,
        key_field: str,
        *,
        id_factory: Callable[[], Any] | None = None,
        conflict: Callable[[ModelT], ConflictError] | None = None,
    ) -> None:
        self.session = session
        self.model = model
        self.entity = entity
        self.key_field = key_field
        self._id_factory = id_factory
        self._conflict = conflict

    def _flush(self, record: ModelT) -> None:
        try:
            self.session.flush()
        except IntegrityError as exc:
            self.session.rollback()
            logger.warning("store.integrity_error entity=%s error=%s", self.entity, exc.orig)
            message = str(exc.orig).lower()
            if "not null" in message or "not-null" in message:
                raise ValidationError(f"{self.entity.capitalize()} is missing a required value") from exc
            if "foreign key" in message:
                raise NotFoundError(f"{self.entity.capitalize()} references a missing record") from exc
            if self._conflict is not None:
                raise self._conflict(record) from exc
            raise DuplicateRecordError(self.entity, self.key_of(record)) from exc

    def get(self, key: Any) -> ModelT | None:
        return self.session.get(self.model, key)

    def list(self) -> list[ModelT]:
        statement = select(self.model).order_by(col(getattr(self.model, self.key_field)).asc())
        return list(self.session.exec(statement).all())

    def find(self, **criteria: Any) -> list[ModelT]:
        statement = select(self.model)
        for field, value in criteria.items():
            statement = statement.where(col(getattr(self.model, field)) == value)
        return list(self.session.exec(statement).all())

    def insert(self, record: ModelT) -> ModelT:
        key = self.key_of(record)
        if key is not None and self.get(key) is not None:
            raise DuplicateRecordError(self.entity, key)
        self.session.add(record)
        self._flush(record)
        self.session.refresh(record)
        return record

    def update(self, key: Any, changes: Mapping[str, Any]) -> ModelT:
        record = self.require(key)
        for field, value in changes.items():
            setattr(record, field, value)
        self.session.add(record)
        self._flush(record)
        self.session.refresh(record)
        return record

    def delete(self, key: Any) -> None:
        record = self.require(key)
        self.session.delete(record)
        self.session.flush()

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(self.model)).one()

    def allocate_id(self) -> Any | None:
        if self._id_factory is None:
            return None
        return self._id_factory()


def _assignment_conflict(record: Assignment) -> ConflictError:
    return DuplicateAssignmentError(record.employee_id, record.assignment_date)


class Store(ABC):
    employees: Repository[Employee]
    projects: Repository[Project]
    assignments: Repository[Assignment]

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator[Store]:
        """Scope in which a read-check-write sequence runs without interleaving."""


class InMemoryStore(Store):
    """Process-local store. ``transaction()`` serializes writers with a lock."""

    def __init__(
        self,
        employees: list[Employee] | None = None,
        projects: list[Project] | None = None,
        assignments: list[Assignment] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        sequence = HighWaterSequence()
        self.employees = InMemoryRepository(
            "employee",
            "employee_id",
            employees,
            id_factory=lambda records: first_free_id(
                next_employee_id, len(records), {r.employee_id for r in records}
            ),
        )
        self.projects = InMemoryRepository(
            "project",
            "project_id",
            projects,
            id_factory=lambda records: first_free_id(
                next_project_id, len(records), {r.project_id for r in records}
            ),
        )
        self.assignments = InMemoryRepository(
            "assignment",
            "assignment_id",
            assignments,
            id_factory=lambda records: sequence([r.assignment_id for r in records if r.assignment_id is not None]),
        )

    @contextmanager
    def transaction(self) -> Iterator[InMemoryStore]:
        with self._lock:
            yield self


class SqlStore(Store):
    """Store over a SQLModel session.

    Assignment ids come from the database sequence and the
    ``(employee_id, assignment_date)`` unique constraint backs the duplicate
    check, so concurrent writers cannot both succeed.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.employees = SqlRepository(
            session,
            Employee,
            "employee",
            "employee_id",
            id_factory=lambda: random_id(EMPLOYEE_ID_PREFIX),
        )
        self.projects = SqlRepository(
            session,
            Project,
            "project",
            "project_id",
            id_factory=lambda: random_id(PROJECT_ID_PREFIX),
        )
        self.assignments = SqlRepository(
            session,
            Assignment,
            "assignment",
            "assignment_id",
            conflict=_assignment_conflict,
        )

    @contextmanager
    def transaction(self) -> Iterator[SqlStore]:
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
