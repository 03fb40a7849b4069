"""Common Pydantic schemas."""
from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str
    error_code: Optional[str] = None


class StatusResponse(BaseModel):
    """Health check response."""

    status: str
    app: str
