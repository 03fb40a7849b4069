"""Pydantic schemas for request/response validation."""
from bookshelf.schemas.book import (
    BookCreate,
    BookOut,
    BookUpdate,
    parse_book_id,
)
from bookshelf.schemas.common import ErrorResponse, StatusResponse

__all__ = [
    "BookCreate",
    "BookUpdate",
    "BookOut",
    "parse_book_id",
    "ErrorResponse",
    "StatusResponse",
]
