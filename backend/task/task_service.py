# backend/task/task_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import case, delete, func, insert, select, update
from sqlalchemy.orm import Session

from backend.errors import store_operation
from backend.models.employee import Employee
from backend.models.task import TASK_STATUSES, Task

logger = logging.getLogger("backend.task")

tasks = Task.__table__
employees = Employee.__table__

MUTABLE_FIELDS = ("title", "description", "status", "priority", "employee_id", "due_date")


def _with_employee():
    # task columns + denormalized name/email of the assignee (NULL when unassigned)
    return select(
        tasks,
        employees.c.name.label("employee_name"),
        employees.c.email.label("employee_email"),
    ).select_from(tasks.outerjoin(employees, tasks.c.employee_id == employees.c.id))


def get_all_tasks(
    db: Session,
    status: Optional[str] = None,
    employee_id: Optional[int] = None,
) -> List[dict]:
    """Tasks newest first; each given filter narrows the result (AND)."""
    stmt = _with_employee()
    if status is not None:
        stmt = stmt.where(tasks.c.status == status)
    if employee_id is not None:
        stmt = stmt.where(tasks.c.employee_id == employee_id)
    stmt = stmt.order_by(tasks.c.created_at.desc(), tasks.c.id.desc())

    with store_operation(db, "task.get_all", "Failed to fetch tasks"):
        return [dict(row) for row in db.execute(stmt).mappings()]


def get_task_by_id(db: Session, task_id: int) -> Optional[dict]:
    stmt = _with_employee().where(tasks.c.id == task_id)
    with store_operation(db, "task.get_by_id", "Failed to fetch task"):
        row = db.execute(stmt).mappings().first()
    return dict(row) if row else None


def _values(data: dict) -> dict:
    values = {field: data.get(field) for field in MUTABLE_FIELDS}
    values["status"] = values["status"] or "pending"
    values["priority"] = values["priority"] or "medium"
    return values


def create_task(db: Session, data: dict) -> dict:
    stmt = insert(tasks).values(**_values(data)).returning(*tasks.c)
    with store_operation(db, "task.create", "Failed to create task"):
        row = db.execute(stmt).mappings().one()
        db.commit()

    logger.info("task_created", extra={"task_id": row["id"], "employee_id": row["employee_id"]})
    return dict(row)


def update_task(db: Session, task_id: int, data: dict) -> Optional[dict]:
    stmt = (
        update(tasks)
        .where(tasks.c.id == task_id)
        .values(**_values(data))
        .returning(*tasks.c)
    )
    with store_operation(db, "task.update", "Failed to update task"):
        row = db.execute(stmt).mappings().first()
        db.commit()

    if row is None:
        return None
    logger.info("task_updated", extra={"task_id": task_id})
    return dict(row)


def delete_task(db: Session, task_id: int) -> Optional[dict]:
    stmt = delete(tasks).where(tasks.c.id == task_id).returning(*tasks.c)
    with store_operation(db, "task.delete", "Failed to delete task"):
        row = db.execute(stmt).mappings().first()
        db.commit()

    if row is None:
        return None
    logger.info("task_deleted", extra={"task_id": task_id})
    return dict(row)


def completion_rate(completed: int, total: int) -> float:
    if not total:
        return 0
    return round(completed / total * 100, 2)


def get_task_stats(db: Session) -> dict:
    """Dashboard counters computed in a single aggregate over all tasks."""
    columns = [func.count(tasks.c.id).label("total_tasks")]
    for status in TASK_STATUSES:
        columns.append(func.count(case((tasks.c.status == status, 1))).label(f"{status}_tasks"))

    with store_operation(db, "task.stats", "Failed to fetch dashboard stats"):
        row = db.execute(select(*columns)).mappings().one()

    stats = {key: int(value or 0) for key, value in row.items()}
    stats["completion_rate"] = completion_rate(stats["completed_tasks"], stats["total_tasks"])
    return stats
