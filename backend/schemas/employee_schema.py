# backend/schemas/employee_schema.py
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from backend.schemas.task_schema import TaskRead

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_LENGTH = 255


# --------- Input (untrusted body, all checks accumulate) ----------
class EmployeeInput(BaseModel):
    model_config = ConfigDict(validate_default=True, extra="ignore")

    name: Any = None
    email: Any = None
    position: Any = None
    department: Any = None

    @field_validator("name")
    @classmethod
    def check_name(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("name", "Name is required and must be a non-empty string")
        value = value.strip()
        if len(value) < 2:
            raise PydanticCustomError("name", "Name must be at least 2 characters long")
        if len(value) > MAX_LENGTH:
            raise PydanticCustomError("name", "Name must not exceed 255 characters")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("email", "Email is required and must be a non-empty string")
        value = value.strip()
        if not EMAIL_RE.match(value):
            raise PydanticCustomError("email", "Email must be a valid email address")
        if len(value) > MAX_LENGTH:
            raise PydanticCustomError("email", "Email must not exceed 255 characters")
        return value.lower()

    @field_validator("position")
    @classmethod
    def check_position(cls, value):
        return _optional_text(value, "Position")

    @field_validator("department")
    @classmethod
    def check_department(cls, value):
        return _optional_text(value, "Department")


def _optional_text(value, label: str) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str) or len(value.strip()) > MAX_LENGTH:
        raise PydanticCustomError(
            "optional_text", f"{label} must be a string not exceeding 255 characters"
        )
    return value.strip() or None


# --------- Read (responses) ----------
class EmployeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    position: Optional[str] = None
    department: Optional[str] = None
    created_at: datetime


class EmployeeWithTasks(EmployeeRead):
    tasks: List[TaskRead] = []
    task_count: int = 0


class EmployeeWithTaskCount(EmployeeRead):
    task_count: int = 0
    completed_tasks: int = 0


class EmployeeDeleted(BaseModel):
    message: str = "Employee deleted successfully"
    employee: EmployeeRead
