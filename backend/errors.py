# backend/errors.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session

logger = logging.getLogger("backend.errors")


class AppError(Exception):
    """Base of every error that is rendered to the caller as JSON."""

    status_code = 500
    error = "Something went wrong!"

    def __init__(
        self,
        error: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[List[str]] = None,
    ):
        self.error = error or self.error
        self.message = message
        self.details = details
        super().__init__(self.error)

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        if self.details:
            body["details"] = list(self.details)
        return body


class ValidationError(AppError):
    status_code = 400
    error = "Validation failed"

    def __init__(self, details: List[str], error: Optional[str] = None, message: Optional[str] = None):
        super().__init__(error=error, message=message, details=details)


class AuthError(AppError):
    status_code = 401
    error = "Authentication required"


class MissingTokenError(AuthError):
    error = "Authentication required"


class InvalidTokenError(AuthError):
    error = "Invalid token"


class ExpiredTokenError(AuthError):
    error = "Token expired"


class InvalidApiKeyError(AuthError):
    error = "Invalid API key"


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[int] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(error=f"{entity} not found")


class ConflictError(AppError):
    status_code = 409
    error = "Email already exists"


class TransientStoreError(AppError):
    status_code = 503
    error = "Database connection issue. Please try again in a moment."

    def to_body(self) -> dict:
        body = super().to_body()
        body["retry"] = True
        return body


class UnknownError(AppError):
    status_code = 500


# ==========================
#  STORE DRIVER MAPPING
# ==========================
# SQLSTATE codes (psycopg2 .pgcode / psycopg .sqlstate) and
# sqlite3 extended error names (.sqlite_errorname)
UNIQUE_VIOLATION_CODES = frozenset({"23505", "SQLITE_CONSTRAINT_UNIQUE"})
FOREIGN_KEY_VIOLATION_CODES = frozenset({"23503", "SQLITE_CONSTRAINT_FOREIGNKEY"})

TRANSIENT_ERROR_CLASSES = (
    sa_exc.OperationalError,
    sa_exc.InterfaceError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
)


def driver_error_code(error: BaseException) -> Optional[str]:
    """Return the driver level code carried by a SQLAlchemy DBAPIError."""
    orig = getattr(error, "orig", None)
    if orig is None:
        return None
    for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    return None


def map_store_error(error: BaseException) -> AppError:
    if isinstance(error, AppError):
        return error

    if isinstance(error, sa_exc.IntegrityError):
        code = driver_error_code(error)
        if code in UNIQUE_VIOLATION_CODES:
            return ConflictError()
        if code in FOREIGN_KEY_VIOLATION_CODES:
            return ValidationError(["Assigned employee does not exist"])
        return UnknownError()

    if isinstance(error, TRANSIENT_ERROR_CLASSES):
        return TransientStoreError()

    if isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated:
        return TransientStoreError()

    return UnknownError()


@contextmanager
def store_operation(db: Session, operation: str, failure: Optional[str] = None) -> Iterator[Session]:
    """Run one store statement; roll back and re-raise driver errors mapped
    onto the AppError taxonomy. ``failure`` is the error text used when the
    driver error has no more specific meaning."""
    try:
        yield db
    except sa_exc.SQLAlchemyError as exc:
        db.rollback()
        mapped = map_store_error(exc)
        if isinstance(mapped, UnknownError) and failure:
            mapped = UnknownError(error=failure)
        logger.error(
            "store_error",
            extra={
                "operation": operation,
                "error_type": type(exc).__name__,
                "driver_code": driver_error_code(exc),
                "mapped_to": type(mapped).__name__,
            },
        )
        raise mapped from exc
