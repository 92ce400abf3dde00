from __future__ import annotations

from fastapi import APIRouter, status
from fastapi_pagination import paginate

from metropower.api.deps import MANAGER_DEP, STORE_DEP
from metropower.core.logging import get_logger
from metropower.models import Employee
from metropower.schemas.org import EmployeeCreate, EmployeeRead, EmployeeUpdate
from metropower.schemas.pagination import DefaultLimitOffsetPage
from metropower.services import directory
from metropower.services.assignments import parse_assignment_date
from metropower.services.store import Store
from metropower.services.week_view import unassigned_employees

router = APIRouter(prefix="/employees", tags=["employees"])
logger = get_logger(__name__)


@router.get("", response_model=DefaultLimitOffsetPage[EmployeeRead])
def list_employees(store: Store = STORE_DEP) -> DefaultLimitOffsetPage[EmployeeRead]:
    employees = sorted(store.employees.list(), key=lambda e: e.employee_id)
    return paginate([EmployeeRead.model_validate(e) for e in employees])


@router.get("/unassigned/{on}", response_model=DefaultLimitOffsetPage[EmployeeRead])
def list_unassigned_employees(on: str, store: Store = STORE_DEP) -> DefaultLimitOffsetPage[EmployeeRead]:
    day = parse_assignment_date(on)
    free = unassigned_employees(store.employees.list(), store.assignments.find(assignment_date=day), day)
    return paginate([EmployeeRead.model_validate(e) for e in free])


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[MANAGER_DEP],
)
def create_employee(payload: EmployeeCreate, store: Store = STORE_DEP) -> Employee:
    with store.transaction():
        emp = directory.create_employee(payload.model_dump(), store.employees)
    logger.info("employee.created employee_id=%s name=%s", emp.employee_id, emp.name)
    return emp


@router.get("/{employee_id}", response_model=EmployeeRead)
def get_employee(employee_id: str, store: Store = STORE_DEP) -> Employee:
    return store.employees.require(employee_id)


@router.patch("/{employee_id}", response_model=EmployeeRead, dependencies=[MANAGER_DEP])
def update_employee(employee_id: str, payload: EmployeeUpdate, store: Store = STORE_DEP) -> Employee:
    data = payload.model_dump(exclude_unset=True)
    with store.transaction():
        emp = directory.update_employee(employee_id, data, store.employees)
    logger.info("employee.updated employee_id=%s fields=%s", employee_id, ",".join(sorted(data)))
    return emp
