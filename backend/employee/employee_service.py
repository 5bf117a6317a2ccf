# backend/employee/employee_service.py
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy import case, delete, func, insert, select, update
from sqlalchemy.orm import Session

from backend.errors import store_operation
from backend.models.employee import Employee
from backend.models.task import Task

logger = logging.getLogger("backend.employee")

employees = Employee.__table__
tasks = Task.__table__

NEWEST_FIRST = (employees.c.created_at.desc(), employees.c.id.desc())


def get_all_employees(db: Session) -> List[dict]:
    stmt = select(employees).order_by(*NEWEST_FIRST)
    with store_operation(db, "employee.get_all", "Failed to fetch employees"):
        return [dict(row) for row in db.execute(stmt).mappings()]


def get_employee_by_id(db: Session, employee_id: int) -> Optional[dict]:
    stmt = select(employees).where(employees.c.id == employee_id)
    with store_operation(db, "employee.get_by_id", "Failed to fetch employee"):
        row = db.execute(stmt).mappings().first()
    return dict(row) if row else None


def create_employee(db: Session, data: dict) -> dict:
    stmt = (
        insert(employees)
        .values(
            name=data["name"],
            email=data["email"],
            position=data.get("position"),
            department=data.get("department"),
        )
        .returning(*employees.c)
    )
    with store_operation(db, "employee.create", "Failed to create employee"):
        row = db.execute(stmt).mappings().one()
        db.commit()

    logger.info("employee_created", extra={"employee_id": row["id"]})
    return dict(row)


def update_employee(db: Session, employee_id: int, data: dict) -> Optional[dict]:
    stmt = (
        update(employees)
        .where(employees.c.id == employee_id)
        .values(
            name=data["name"],
            email=data["email"],
            position=data.get("position"),
            department=data.get("department"),
        )
        .returning(*employees.c)
    )
    with store_operation(db, "employee.update", "Failed to update employee"):
        row = db.execute(stmt).mappings().first()
        db.commit()

    if row is None:
        return None
    logger.info("employee_updated", extra={"employee_id": employee_id})
    return dict(row)


def delete_employee(db: Session, employee_id: int) -> Optional[dict]:
    stmt = delete(employees).where(employees.c.id == employee_id).returning(*employees.c)
    with store_operation(db, "employee.delete", "Failed to delete employee"):
        row = db.execute(stmt).mappings().first()
        db.commit()

    if row is None:
        return None
    logger.info("employee_deleted", extra={"employee_id": employee_id})
    return dict(row)


def get_employees_with_task_count(db: Session) -> List[dict]:
    """Every employee with ``task_count`` and ``completed_tasks``; both are 0
    for employees without tasks."""
    completed = case((tasks.c.status == "completed", 1))
    stmt = (
        select(
            employees,
            func.count(tasks.c.id).label("task_count"),
            func.count(completed).label("completed_tasks"),
        )
        .select_from(employees.outerjoin(tasks, tasks.c.employee_id == employees.c.id))
        .group_by(employees.c.id)
        .order_by(*NEWEST_FIRST)
    )
    with store_operation(db, "employee.get_with_task_count", "Failed to fetch employees"):
        return [dict(row) for row in db.execute(stmt).mappings()]


def group_tasks_by_employee(task_rows: List[dict]) -> Dict[int, List[dict]]:
    grouped: Dict[int, List[dict]] = defaultdict(list)
    for task in task_rows:
        if task["employee_id"] is not None:
            grouped[task["employee_id"]].append(task)
    return grouped


def get_employees_with_tasks(db: Session) -> List[dict]:
    """Every employee with the list of tasks assigned to them (newest first)
    and ``task_count`` equal to its length."""
    assigned = (
        select(tasks)
        .where(tasks.c.employee_id.is_not(None))
        .order_by(tasks.c.created_at.desc(), tasks.c.id.desc())
    )
    with store_operation(db, "employee.get_with_tasks", "Failed to fetch employees"):
        employee_rows = [dict(row) for row in db.execute(select(employees).order_by(*NEWEST_FIRST)).mappings()]
        task_rows = [dict(row) for row in db.execute(assigned).mappings()]

    by_employee = group_tasks_by_employee(task_rows)
    result = []
    for employee in employee_rows:
        assigned_tasks = by_employee.get(employee["id"], [])
        result.append({**employee, "tasks": assigned_tasks, "task_count": len(assigned_tasks)})
    return result
