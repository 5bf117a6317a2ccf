# backend/task/task_router.py

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from backend.auth.dependencies import optional_user, require_user
from backend.database import get_db
from backend.errors import NotFoundError, ValidationError
from backend.schemas.task_schema import TaskDeleted, TaskRead, TaskStats, parse_positive_int
from backend.task import task_service
from backend.validation import validate_id, validate_task

logger = logging.getLogger("backend.task")


# ==========================
#  ROUTER
# ==========================
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


def _filters(status: Optional[str], employee_id: Optional[str]) -> dict:
    # empty query values mean "no constraint"; status is an exact match
    assignee = None
    if employee_id:
        assignee = parse_positive_int(employee_id)
        if assignee is None:
            raise ValidationError(["Employee ID must be a positive integer"])
    return {"status": status or None, "employee_id": assignee}


@router.get("", response_model=list[TaskRead])
def get_all_tasks(
    status: Optional[str] = None,
    employee_id: Optional[str] = None,
    db: Session = Depends(get_db),
    user: Optional[dict] = Depends(optional_user),
):
    filters = _filters(status, employee_id)
    logger.debug("tasks_listed", extra={**filters, "authenticated": user is not None})
    return task_service.get_all_tasks(db, **filters)


@router.get("/stats", response_model=TaskStats)
def get_dashboard_stats(db: Session = Depends(get_db)):
    return task_service.get_task_stats(db)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, db: Session = Depends(get_db)):
    task_id = validate_id(task_id)
    task = task_service.get_task_by_id(db, task_id)
    if not task:
        raise NotFoundError("Task", task_id)
    return task


@router.post("", response_model=TaskRead, status_code=201)
def create_task(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_user),
):
    data = validate_task(payload)
    return task_service.create_task(db, data)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: str,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(require_user),
):
    task_id = validate_id(task_id)
    data = validate_task(payload)

    task = task_service.update_task(db, task_id, data)
    if not task:
        raise NotFoundError("Task", task_id)
    return task


@router.delete("/{task_id}", response_model=TaskDeleted)
def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_user),
):
    task_id = validate_id(task_id)
    task = task_service.delete_task(db, task_id)
    if not task:
        raise NotFoundError("Task", task_id)
    return {"message": "Task deleted successfully", "task": task}
