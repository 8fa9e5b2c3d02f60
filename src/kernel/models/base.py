"""
Declarative base and shared column mixins.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for identity core models."""

    # Native UUID on PostgreSQL, CHAR(32) on SQLite
    type_annotation_map = {
        uuid.UUID: Uuid(),
    }


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()


class UuidPrimaryKeyMixin:
    """Random UUID4 primary key, assigned client-side on insert."""

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=generate_uuid)


class TimestampMixin:
    """Database-assigned creation time."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
