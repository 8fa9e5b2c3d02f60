"""
Kernel Layer

Foundational components shared by the request layer:
- Identity Core (credential records, profiles, login)
- Typed errors mapped to transport responses by the caller

Invariants:
- Identity and Profile are written in one transaction or not at all
- Email uniqueness is enforced by the database at write time
"""

from src.kernel.errors import (
    CoreError,
    ConflictError,
    NotFoundError,
    ForbiddenError,
    InternalError,
)
from src.kernel.models import Identity, Profile, ProfileRole

__all__ = [
    "CoreError",
    "ConflictError",
    "NotFoundError",
    "ForbiddenError",
    "InternalError",
    "Identity",
    "Profile",
    "ProfileRole",
]
