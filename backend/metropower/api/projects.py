from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query, status
from fastapi_pagination import paginate

from metropower.api.deps import MANAGER_DEP, STORE_DEP
from metropower.core.logging import get_logger
from metropower.models import Project
from metropower.schemas.assignments import AssignmentRead
from metropower.schemas.pagination import DefaultLimitOffsetPage
from metropower.schemas.projects import ProjectCreate, ProjectRead, ProjectUpdate
from metropower.services import directory
from metropower.services.store import Store
from metropower.services.week_view import active_projects, filter_assignments

router = APIRouter(prefix="/projects", tags=["projects"])
logger = get_logger(__name__)

RANGE_START_QUERY = Query(...)
RANGE_END_QUERY = Query(...)


@router.get("", response_model=DefaultLimitOffsetPage[ProjectRead])
def list_projects(store: Store = STORE_DEP) -> DefaultLimitOffsetPage[ProjectRead]:
    projects = sorted(store.projects.list(), key=lambda p: p.project_id)
    return paginate([ProjectRead.model_validate(p) for p in projects])


@router.get("/active", response_model=DefaultLimitOffsetPage[ProjectRead])
def list_active_projects(store: Store = STORE_DEP) -> DefaultLimitOffsetPage[ProjectRead]:
    return paginate([ProjectRead.model_validate(p) for p in active_projects(store.projects.list())])


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[MANAGER_DEP],
)
def create_project(payload: ProjectCreate, store: Store = STORE_DEP) -> Project:
    with store.transaction():
        project = directory.create_project(payload.model_dump(), store.projects)
    logger.info("project.created project_id=%s name=%s", project.project_id, project.name)
    return project


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(project_id: str, store: Store = STORE_DEP) -> Project:
    return store.projects.require(project_id)


@router.patch("/{project_id}", response_model=ProjectRead, dependencies=[MANAGER_DEP])
def update_project(project_id: str, payload: ProjectUpdate, store: Store = STORE_DEP) -> Project:
    data = payload.model_dump(exclude_unset=True)
    with store.transaction():
        project = directory.update_project(project_id, data, store.projects)
    logger.info("project.updated project_id=%s fields=%s", project_id, ",".join(sorted(data)))
    return project


@router.get("/{project_id}/assignments", response_model=DefaultLimitOffsetPage[AssignmentRead])
def list_project_assignments(
    project_id: str,
    start_date: date = RANGE_START_QUERY,
    end_date: date = RANGE_END_QUERY,
    store: Store = STORE_DEP,
) -> DefaultLimitOffsetPage[AssignmentRead]:
    store.projects.require(project_id)
    selected = filter_assignments(
        store.assignments.find(project_id=project_id),
        start_date=start_date,
        end_date=end_date,
    )
    return paginate([AssignmentRead.model_validate(a) for a in selected])
