# backend/validation.py
"""Input normalisation for the mutating endpoints.

Every check of a body runs before anything is reported, so callers always
get the complete list of problems in ``ValidationError.details``.
"""
from __future__ import annotations

from typing import Any

import pydantic

from backend.errors import ValidationError
from backend.schemas.employee_schema import EmployeeInput
from backend.schemas.task_schema import TaskInput, parse_positive_int


def _run(model: type[pydantic.BaseModel], data: Any) -> dict:
    if not isinstance(data, dict):
        raise ValidationError(["Request body must be a JSON object"])
    try:
        return model.model_validate(data).model_dump()
    except pydantic.ValidationError as exc:
        raise ValidationError([err["msg"] for err in exc.errors()]) from exc


def validate_employee(data: Any) -> dict:
    """Return ``{name, email, position, department}`` trimmed, with the email
    lowercased and empty optionals as None."""
    return _run(EmployeeInput, data)


def validate_task(data: Any) -> dict:
    """Return ``{title, description, status, priority, employee_id, due_date}``
    with status/priority defaults applied and due_date as a ``date``."""
    return _run(TaskInput, data)


def validate_id(value: Any) -> int:
    entity_id = parse_positive_int(value)
    if entity_id is None:
        raise ValidationError(["ID must be a positive integer"], error="Invalid ID")
    return entity_id
