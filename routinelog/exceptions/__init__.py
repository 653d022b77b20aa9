"""Exceptions package initialization."""

from .CustomError import (
    RoutineLogError,
    ValidationError,
    NotFoundError,
    DuplicateError,
    StoreError,
    StoreWriteError,
    StoreReadError,
    AuthError,
    store_write,
    store_read,
)

__all__ = [
    "RoutineLogError",
    "ValidationError",
    "NotFoundError",
    "DuplicateError",
    "StoreError",
    "StoreWriteError",
    "StoreReadError",
    "AuthError",
    "store_write",
    "store_read",
]
