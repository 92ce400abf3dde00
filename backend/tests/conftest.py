# ruff: noqa

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from metropower.core.config import Settings
from metropower.db.session import build_engine, init_db
from metropower.main import create_app
from metropower.models import Employee, Project
from metropower.services.store import InMemoryStore, SqlStore


def _employees() -> list[Employee]:
    return [Employee(employee_id="EMP001", name="John Smith")]


def _projects() -> list[Project]:
    return [Project(project_id="PROJ-001", name="Downtown Office Building")]


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore(employees=_employees(), projects=_projects())


@pytest.fixture
def sql_store() -> Iterator[SqlStore]:
    engine = build_engine("sqlite://")
    init_db(engine)
    with Session(engine, expire_on_commit=False) as session:
        store = SqlStore(session)
        with store.transaction():
            for employee in _employees():
                store.employees.insert(employee)
            for project in _projects():
                store.projects.insert(project)
        yield store
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest):
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client_factory():
    def _make(**overrides) -> TestClient:
        settings = Settings(_env_file=None, **{"storage_backend": "memory", **overrides})
        return TestClient(create_app(settings))

    return _make


@pytest.fixture
def client(client_factory) -> TestClient:
    return client_factory(seed_demo_data=True)
