"""
Identity result schemas.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class IdentityRecord(BaseModel):
    """Created identity as returned to callers (password hash excluded)."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str
    role: str
    created_at: datetime


class RegistrationResult(BaseModel):
    """Body of a successful registration response."""

    message: str = "User registered successfully"
    identity: IdentityRecord


class LoginResult(BaseModel):
    """Token issued on successful login."""

    token: str
    subject_id: uuid.UUID
