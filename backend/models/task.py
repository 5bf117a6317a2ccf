# backend/models/task.py

from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from backend.database import Base

TASK_STATUSES = ("pending", "in_progress", "completed", "cancelled")
TASK_PRIORITIES = ("low", "medium", "high")


def utcnow() -> datetime:
    # naive UTC, SQLite DateTime columns do not keep tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    status = Column(String(20), default="pending", nullable=False, index=True)
    priority = Column(String(10), default="medium", nullable=False)

    # NULL = unassigned; deleting the employee unassigns at store level
    employee_id = Column(
        Integer,
        ForeignKey("employees.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    due_date = Column(Date, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
