"""Core utilities."""
from bookshelf.core.exceptions import (
    AppException,
    NotFoundError,
    StorageError,
    ValidationError,
)
from bookshelf.core.logging import get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Exceptions
    "AppException",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
