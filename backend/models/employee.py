# backend/models/employee.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String

from backend.database import Base
from backend.models.task import utcnow


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    # stored lowercased; uniqueness is the store's job
    email = Column(String(255), unique=True, index=True, nullable=False)

    position = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
