"""
Pydantic schemas for results returned by the core.
"""

from src.schemas.common import ErrorResponse
from src.schemas.document import DEFAULT_CONTENT_TYPE, Document
from src.schemas.identity import IdentityRecord, LoginResult, RegistrationResult

__all__ = [
    "ErrorResponse",
    "DEFAULT_CONTENT_TYPE",
    "Document",
    "IdentityRecord",
    "LoginResult",
    "RegistrationResult",
]
