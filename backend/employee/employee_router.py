# backend/employee/employee_router.py

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from backend.auth.dependencies import optional_user, require_user
from backend.database import get_db
from backend.employee import employee_service
from backend.errors import NotFoundError
from backend.schemas.employee_schema import (
    EmployeeDeleted,
    EmployeeRead,
    EmployeeWithTaskCount,
    EmployeeWithTasks,
)
from backend.validation import validate_employee, validate_id

logger = logging.getLogger("backend.employee")

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


# ==========================
#  READ
# ==========================
@router.get("", response_model=list[EmployeeRead])
def get_all_employees(
    db: Session = Depends(get_db),
    user: Optional[dict] = Depends(optional_user),
):
    logger.debug("employees_listed", extra={"authenticated": user is not None})
    return employee_service.get_all_employees(db)


@router.get("/with-tasks", response_model=list[EmployeeWithTasks])
def get_employees_with_tasks(db: Session = Depends(get_db)):
    return employee_service.get_employees_with_tasks(db)


@router.get("/with-task-count", response_model=list[EmployeeWithTaskCount])
def get_employees_with_task_count(db: Session = Depends(get_db)):
    return employee_service.get_employees_with_task_count(db)


@router.get("/{employee_id}", response_model=EmployeeRead)
def get_employee(employee_id: str, db: Session = Depends(get_db)):
    employee_id = validate_id(employee_id)
    employee = employee_service.get_employee_by_id(db, employee_id)
    if not employee:
        raise NotFoundError("Employee", employee_id)
    return employee


# ==========================
#  WRITE (bearer token required)
# ==========================
@router.post("", response_model=EmployeeRead, status_code=201)
def create_employee(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_user),
):
    data = validate_employee(payload)
    return employee_service.create_employee(db, data)


@router.put("/{employee_id}", response_model=EmployeeRead)
def update_employee(
    employee_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_user),
):
    employee_id = validate_id(employee_id)
    data = validate_employee(payload)

    employee = employee_service.update_employee(db, employee_id, data)
    if not employee:
        raise NotFoundError("Employee", employee_id)
    return employee


@router.delete("/{employee_id}", response_model=EmployeeDeleted)
def delete_employee(
    employee_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_user),
):
    employee_id = validate_id(employee_id)
    employee = employee_service.delete_employee(db, employee_id)
    if not employee:
        raise NotFoundError("Employee", employee_id)
    return {"message": "Employee deleted successfully", "employee": employee}
