"""
Error taxonomy shared by repositories, the unit of work and services.

A presentation layer only needs to catch StoreManagementError and call
to_response() to get the body and status code it should return.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class StoreManagementError(Exception):
    """Base class for every error raised by the core."""
    http_status = 500


class NotFoundError(StoreManagementError):
    """404-level: referenced entity does not exist."""
    http_status = 404

    def __init__(self, entity: str, key: Any, *, by: str = "ID"):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} with {by} {key} not found.")


class ValidationError(StoreManagementError, ValueError):
    """400-level input problem (bad payload, unresolved parent reference)."""
    http_status = 400


class ConstraintViolationError(StoreManagementError):
    """409-level: duplicate code within its parent scope."""
    http_status = 409

    def __init__(self, message: str, *, entity: str | None = None, key: Any = None):
        self.entity = entity
        self.key = key
        super().__init__(message)


class StorageError(StoreManagementError):
    """500-level: connectivity loss or unexpected storage failure."""
    http_status = 500


_UNIQUE_SQLSTATE = "23505"
_UNIQUE_MARKERS = ("unique constraint", "duplicate key", "duplicate entry", "unique index")


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when an IntegrityError comes from a unique index rather than a FK / NOT NULL check."""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == _UNIQUE_SQLSTATE:
        return True
    text = str(orig if orig is not None else exc).lower()
    return any(marker in text for marker in _UNIQUE_MARKERS)


def translate_storage_error(exc: SQLAlchemyError, *, entity: str | None = None) -> StoreManagementError:
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        label = entity or "Entity"
        return ConstraintViolationError(
            f"{label} code already exists in this scope.",
            entity=entity,
        )
    return StorageError(f"Database error: {getattr(exc, 'orig', None) or exc}")


def to_response(exc: StoreManagementError) -> tuple[dict, int]:
    return {"error": str(exc)}, exc.http_status
