"""Custom exception classes for Routine Log."""

import functools
from typing import Optional, Dict, Any

from firebase_admin.exceptions import FirebaseError
from google.api_core.exceptions import GoogleAPICallError

from routinelog.util.logger import get_logger

logger = get_logger(__name__)


class RoutineLogError(Exception):
    """Base exception class for Routine Log errors."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize RoutineLogError.

        Args:
            message: Error message
            code: Optional error code
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.code = code or "ROUTINELOG_ERROR"
        self.details = details or {}


class ValidationError(RoutineLogError):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize ValidationError.

        Args:
            message: Error message
            field: Optional field that failed validation
            details: Optional additional error details
        """
        if field:
            details = details or {}
            details["field"] = field

        super().__init__(message, code="VALIDATION_ERROR", details=details)


class NotFoundError(RoutineLogError):
    """Raised when a document is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        """Initialize NotFoundError.

        Args:
            resource_type: Type of resource not found
            resource_id: ID of resource not found
        """
        message = f"{resource_type} with ID '{resource_id}' not found"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, code="NOT_FOUND", details=details)


class DuplicateError(RoutineLogError):
    """Raised when a friend request or friendship already exists."""

    def __init__(self, message: str, identifier: Optional[str] = None):
        details = {"identifier": identifier} if identifier else {}
        super().__init__(message, code="DUPLICATE", details=details)


class StoreError(RoutineLogError):
    """Raised when the remote document store rejects or fails an operation."""

    def __init__(self, action: str, message: str, code: str = "STORE_ERROR"):
        super().__init__(f"{action} failed: {message}", code=code, details={"action": action})
        self.action = action


class StoreWriteError(StoreError):
    """Raised when a write against the remote store fails."""

    def __init__(self, action: str, message: str):
        super().__init__(action, message, code="STORE_WRITE_ERROR")


class StoreReadError(StoreError):
    """Raised when a read against the remote store fails."""

    def __init__(self, action: str, message: str):
        super().__init__(action, message, code="STORE_READ_ERROR")


class AuthError(RoutineLogError):
    """Raised when the identity provider rejects a request.

    ``code`` carries the provider-style code (``auth/invalid-credential``),
    ``message`` the user-facing text.
    """

    def __init__(self, code: str, message: str, provider_message: Optional[str] = None):
        details = {"provider_message": provider_message} if provider_message else {}
        super().__init__(message, code=code, details=details)


def _store_errors(error_cls, action: str):
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (GoogleAPICallError, FirebaseError) as e:
                logger.error(f"{action} failed: {e}")
                raise error_cls(action, str(e)) from e
        return wrapper
    return decorator


def store_write(action: str):
    """Decorator turning remote store failures into StoreWriteError."""
    return _store_errors(StoreWriteError, action)


def store_read(action: str):
    """Decorator turning remote store failures into StoreReadError."""
    return _store_errors(StoreReadError, action)
