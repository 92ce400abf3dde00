"""Daily work assignment endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query, status
from fastapi_pagination import paginate

from metropower.api.deps import MANAGER_DEP, RESOLVER_OPTIONS_DEP, STORE_DEP
from metropower.core.logging import get_logger
from metropower.models import Assignment
from metropower.schemas.assignments import (
    AssignmentCreate,
    AssignmentRead,
    AssignmentUpdate,
    WeekSummary,
)
from metropower.schemas.common import OkResponse
from metropower.schemas.pagination import DefaultLimitOffsetPage
from metropower.services import assignments as assignment_service
from metropower.services.assignments import ResolverOptions
from metropower.services.store import Store
from metropower.services.week_view import build_week_summary, filter_assignments

router = APIRouter(prefix="/assignments", tags=["assignments"])
logger = get_logger(__name__)

START_DATE_QUERY = Query(default=None)
END_DATE_QUERY = Query(default=None)
EMPLOYEE_ID_QUERY = Query(default=None)
PROJECT_ID_QUERY = Query(default=None)
WEEK_START_QUERY = Query(default=None, alias="start")


@router.get("", response_model=DefaultLimitOffsetPage[AssignmentRead])
def list_assignments(
    start_date: date | None = START_DATE_QUERY,
    end_date: date | None = END_DATE_QUERY,
    employee_id: str | None = EMPLOYEE_ID_QUERY,
    project_id: str | None = PROJECT_ID_QUERY,
    store: Store = STORE_DEP,
) -> DefaultLimitOffsetPage[AssignmentRead]:
    selected = filter_assignments(
        store.assignments.list(),
        start_date=start_date,
        end_date=end_date,
        employee_id=employee_id,
        project_id=project_id,
    )
    return paginate([AssignmentRead.model_validate(a) for a in selected])


@router.get("/week", response_model=WeekSummary)
def get_week(start: date | None = WEEK_START_QUERY, store: Store = STORE_DEP) -> WeekSummary:
    return build_week_summary(store.assignments.list(), start or date.today())


@router.post(
    "",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[MANAGER_DEP],
)
def create_assignment(
    payload: AssignmentCreate,
    store: Store = STORE_DEP,
    options: ResolverOptions = RESOLVER_OPTIONS_DEP,
) -> Assignment:
    with store.transaction():
        assignment = assignment_service.create_assignment(
            payload.model_dump(),
            store.employees,
            store.projects,
            store.assignments,
            options=options,
        )
    logger.info(
        "assignment.created assignment_id=%s employee_id=%s project_id=%s date=%s",
        assignment.assignment_id,
        assignment.employee_id,
        assignment.project_id,
        assignment.assignment_date,
    )
    return assignment


@router.get("/{assignment_id}", response_model=AssignmentRead)
def get_assignment(assignment_id: int, store: Store = STORE_DEP) -> Assignment:
    return store.assignments.require(assignment_id)


@router.patch("/{assignment_id}", response_model=AssignmentRead, dependencies=[MANAGER_DEP])
def update_assignment(
    assignment_id: int,
    payload: AssignmentUpdate,
    store: Store = STORE_DEP,
    options: ResolverOptions = RESOLVER_OPTIONS_DEP,
) -> Assignment:
    data = payload.model_dump(exclude_unset=True)
    with store.transaction():
        assignment = assignment_service.update_assignment(
            assignment_id,
            data,
            store.employees,
            store.projects,
            store.assignments,
            options=options,
        )
    logger.info("assignment.updated assignment_id=%s fields=%s", assignment_id, ",".join(sorted(data)))
    return assignment


@router.delete("/{assignment_id}", response_model=OkResponse, dependencies=[MANAGER_DEP])
def delete_assignment(assignment_id: int, store: Store = STORE_DEP) -> OkResponse:
    with store.transaction():
        assignment_service.delete_assignment(assignment_id, store.assignments)
    logger.info("assignment.deleted assignment_id=%s", assignment_id)
    return OkResponse()
