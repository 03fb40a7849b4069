"""Custom exceptions for the application."""
from typing import Any, Optional


class AppException(Exception):
    """Base application exception."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Malformed or missing client input."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            error_code="VALIDATION_ERROR",
            details={"field": field} if field else {},
        )


class NotFoundError(AppException):
    """Resource not found errors."""

    status_code = 404

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} not found",
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )


class StorageError(AppException):
    """Backing file could not be read, parsed or written.

    ``details`` keeps the path for the logs; it is never sent to clients.
    """

    status_code = 500

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message,
            error_code="STORAGE_ERROR",
            details={"path": path} if path else {},
        )
