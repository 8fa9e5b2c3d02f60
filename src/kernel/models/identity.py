"""
Identity and profile models for credential management.
"""

import uuid
from enum import Enum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.kernel.models.base import Base, TimestampMixin, UuidPrimaryKeyMixin


class ProfileRole(str, Enum):
    """Roles a profile can hold."""
    ADMIN = "ADMIN"
    USER = "USER"


class Identity(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Credential record keyed by a unique email."""

    __tablename__ = "identities"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    profile: Mapped["Profile"] = relationship(
        "Profile",
        back_populates="identity",
        uselist=False,
    )

    def __repr__(self) -> str:
        return f"<Identity {self.email}>"


class Profile(UuidPrimaryKeyMixin, TimestampMixin, Base):
    """Name and role tied 1:1 to an identity."""

    __tablename__ = "profiles"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[ProfileRole] = mapped_column(
        String(20),
        default=ProfileRole.USER,
        nullable=False,
    )
    identity_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("identities.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    identity: Mapped[Identity] = relationship(
        "Identity",
        back_populates="profile",
    )

    def __repr__(self) -> str:
        return f"<Profile {self.name} ({self.role})>"
