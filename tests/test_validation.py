# tests/test_validation.py

from __future__ import annotations

from datetime import date

import pytest

from backend.errors import ValidationError
from backend.validation import validate_employee, validate_id, validate_task


def test_employee_is_trimmed_and_email_lowercased() -> None:
    data = validate_employee(
        {"name": "  Ada Lovelace ", "email": "  Ada@Example.COM ", "position": " Engineer ", "department": None}
    )
    assert data == {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "position": "Engineer",
        "department": None,
    }


def test_employee_errors_are_accumulated() -> None:
    with pytest.raises(ValidationError) as info:
        validate_employee({"name": "A", "email": "not-an-email", "position": "x" * 256})

    assert info.value.status_code == 400
    assert info.value.details == [
        "Name must be at least 2 characters long",
        "Email must be a valid email address",
        "Position must be a string not exceeding 255 characters",
    ]


def test_employee_missing_required_fields() -> None:
    with pytest.raises(ValidationError) as info:
        validate_employee({"department": 42})

    assert info.value.details == [
        "Name is required and must be a non-empty string",
        "Email is required and must be a non-empty string",
        "Department must be a string not exceeding 255 characters",
    ]


def test_employee_email_length_limit() -> None:
    with pytest.raises(ValidationError) as info:
        validate_employee({"name": "Bob", "email": "a" * 250 + "@x.com"})
    assert info.value.details == ["Email must not exceed 255 characters"]


def test_task_defaults() -> None:
    data = validate_task({"title": "  Write report  "})
    assert data == {
        "title": "Write report",
        "description": None,
        "status": "pending",
        "priority": "medium",
        "employee_id": None,
        "due_date": None,
    }


def test_task_normalises_fields() -> None:
    data = validate_task(
        {
            "title": "Ship it",
            "description": "  soon ",
            "status": "in_progress",
            "priority": "high",
            "employee_id": "7",
            "due_date": "2025-03-09T22:15:00Z",
        }
    )
    assert data["description"] == "soon"
    assert data["employee_id"] == 7
    assert data["due_date"] == date(2025, 3, 9)


def test_task_errors_are_accumulated() -> None:
    with pytest.raises(ValidationError) as info:
        validate_task(
            {
                "title": "ab",
                "description": 12,
                "status": "done",
                "priority": "urgent",
                "employee_id": -3,
                "due_date": "2025-02-30",
            }
        )

    assert info.value.details == [
        "Title must be at least 3 characters long",
        "Description must be a string",
        "Status must be one of: pending, in_progress, completed, cancelled",
        "Priority must be one of: low, medium, high",
        "Employee ID must be a positive integer",
        "Due date must be a valid date",
    ]


def test_task_rejects_non_object_body() -> None:
    with pytest.raises(ValidationError) as info:
        validate_task(["title"])
    assert info.value.details == ["Request body must be a JSON object"]


@pytest.mark.parametrize("value, expected", [("5", 5), (12, 12), (" 3 ", 3)])
def test_validate_id_accepts_positive_integers(value, expected) -> None:
    assert validate_id(value) == expected


@pytest.mark.parametrize("value", ["0", "-1", "abc", "1.5", True, None])
def test_validate_id_rejects_everything_else(value) -> None:
    with pytest.raises(ValidationError) as info:
        validate_id(value)
    assert info.value.to_body() == {"error": "Invalid ID", "details": ["ID must be a positive integer"]}


@pytest.mark.parametrize("value", [2**31, "2147483648", "9" * 20, "²", "3abc", 3.0])
def test_validate_id_rejects_out_of_range_and_loose_numbers(value) -> None:
    with pytest.raises(ValidationError):
        validate_id(value)


def test_validate_id_accepts_integer_maximum() -> None:
    assert validate_id(str(2**31 - 1)) == 2**31 - 1
