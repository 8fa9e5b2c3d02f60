"""
Common schema types shared by callers of the core.
"""

from typing import Optional

from pydantic import BaseModel

from src.kernel.errors import CoreError


class ErrorResponse(BaseModel):
    """Standard error body for a core error."""

    detail: str
    code: Optional[str] = None

    @classmethod
    def from_error(cls, exc: CoreError) -> "ErrorResponse":
        return cls(detail=exc.detail, code=type(exc).__name__)
