"""
SQLAlchemy models for the identity core.
"""

from src.kernel.models.base import Base, TimestampMixin, UuidPrimaryKeyMixin, generate_uuid
from src.kernel.models.identity import Identity, Profile, ProfileRole

__all__ = [
    "Base",
    "TimestampMixin",
    "UuidPrimaryKeyMixin",
    "generate_uuid",
    "Identity",
    "Profile",
    "ProfileRole",
]
