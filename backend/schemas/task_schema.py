# backend/schemas/task_schema.py

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from backend.models.task import TASK_PRIORITIES, TASK_STATUSES


# ids are INTEGER columns; anything larger cannot name a stored row
MAX_ID = 2**31 - 1


def parse_positive_int(value) -> Optional[int]:
    """Accept an int or a string of ASCII digits; return None for anything
    that is not a positive integer within INTEGER range."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        number = int(value.strip())
    else:
        return None
    return number if 0 < number <= MAX_ID else None


def parse_calendar_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


# --------- Input (untrusted body, all checks accumulate) ----------
class TaskInput(BaseModel):
    model_config = ConfigDict(validate_default=True, extra="ignore")

    title: Any = None
    description: Any = None
    status: Any = None
    priority: Any = None
    employee_id: Any = None
    due_date: Any = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("title", "Title is required and must be a non-empty string")
        value = value.strip()
        if len(value) < 3:
            raise PydanticCustomError("title", "Title must be at least 3 characters long")
        if len(value) > 255:
            raise PydanticCustomError("title", "Title must not exceed 255 characters")
        return value

    @field_validator("description")
    @classmethod
    def check_description(cls, value):
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise PydanticCustomError("description", "Description must be a string")
        return value.strip() or None

    @field_validator("status")
    @classmethod
    def check_status(cls, value):
        if value is None or value == "":
            return "pending"
        if value not in TASK_STATUSES:
            raise PydanticCustomError(
                "status", "Status must be one of: " + ", ".join(TASK_STATUSES)
            )
        return value

    @field_validator("priority")
    @classmethod
    def check_priority(cls, value):
        if value is None or value == "":
            return "medium"
        if value not in TASK_PRIORITIES:
            raise PydanticCustomError(
                "priority", "Priority must be one of: " + ", ".join(TASK_PRIORITIES)
            )
        return value

    @field_validator("employee_id")
    @classmethod
    def check_employee_id(cls, value):
        if value is None:
            return None
        employee_id = parse_positive_int(value)
        if employee_id is None:
            raise PydanticCustomError("employee_id", "Employee ID must be a positive integer")
        return employee_id

    @field_validator("due_date")
    @classmethod
    def check_due_date(cls, value):
        if value is None or value == "":
            return None
        due = parse_calendar_date(value)
        if due is None:
            raise PydanticCustomError("due_date", "Due date must be a valid date")
        return due


# --------- Read (responses) ----------
class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    employee_id: Optional[int] = None
    due_date: Optional[date] = None
    created_at: datetime

    # denormalized from the assigned employee
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None


class TaskDeleted(BaseModel):
    message: str = "Task deleted successfully"
    task: TaskRead


class TaskStats(BaseModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    cancelled_tasks: int
    completion_rate: float
