"""
Persistence accessor for identity and profile records.
"""

import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.kernel.errors import ConflictError
from src.kernel.models.identity import Identity, Profile, ProfileRole
from src.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# SQLSTATE for unique_violation (PostgreSQL)
_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True if the integrity error came from a UNIQUE constraint or index."""
    code = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if code:
        return code == _UNIQUE_VIOLATION
    # SQLite reports only a message, e.g. "UNIQUE constraint failed: identities.email"
    return "UNIQUE constraint failed" in str(exc.orig)


@dataclass(frozen=True)
class StoredCredentials:
    """An identity's hash joined with its profile role."""

    identity_id: uuid.UUID
    email: str
    password_hash: str
    role: str


class CredentialStore:
    """
    Reads identities and runs transactional write units.

    Usage:
        store = CredentialStore(session_maker)
        record = await store.run_atomic(create_identity_and_profile)
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self.session_maker = session_maker

    async def get_identity_by_email(self, email: str) -> Optional[Identity]:
        """Get an identity by exact email."""
        async with self.session_maker() as session:
            result = await session.execute(
                select(Identity).where(Identity.email == email)
            )
            return result.scalar_one_or_none()

    async def find_credentials(self, email: str) -> Optional[StoredCredentials]:
        """Get an identity's stored hash together with its profile role."""
        query = (
            select(Identity.id, Identity.email, Identity.password_hash, Profile.role)
            .join(Profile, Profile.identity_id == Identity.id)
            .where(Identity.email == email)
        )
        async with self.session_maker() as session:
            result = await session.execute(query)
            row = result.one_or_none()

        if row is None:
            return None

        role = row.role.value if hasattr(row.role, "value") else row.role
        return StoredCredentials(
            identity_id=row.id,
            email=row.email,
            password_hash=row.password_hash,
            role=role,
        )

    async def count_identities(self, email: Optional[str] = None) -> int:
        """Count identities, optionally restricted to one email."""
        query = select(func.count()).select_from(Identity)
        if email is not None:
            query = query.where(Identity.email == email)
        async with self.session_maker() as session:
            return (await session.execute(query)).scalar_one()

    async def run_atomic(self, fn: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """
        Run ``fn`` inside a single transaction.

        Every write made through the session passed to ``fn`` commits
        together or not at all. A uniqueness violation rolls the unit back
        and surfaces as ConflictError; other integrity errors propagate.
        """
        async with self.session_maker() as session:
            try:
                async with session.begin():
                    return await fn(session)
            except IntegrityError as exc:
                if not is_unique_violation(exc):
                    raise
                logger.warning("Atomic unit rolled back on uniqueness violation")
                raise ConflictError() from exc

    @staticmethod
    async def add_identity(
        session: AsyncSession,
        email: str,
        password_hash: str,
    ) -> Identity:
        """Stage a new identity and flush it so its ID and created_at are set."""
        identity = Identity(
            id=uuid.uuid4(),
            email=email,
            password_hash=password_hash,
        )
        session.add(identity)
        await session.flush()
        await session.refresh(identity, ["created_at"])
        return identity

    @staticmethod
    async def add_profile(
        session: AsyncSession,
        identity_id: uuid.UUID,
        name: str,
        role: ProfileRole,
    ) -> Profile:
        """Stage the profile belonging to an identity."""
        profile = Profile(
            id=uuid.uuid4(),
            name=name,
            role=role.value,
            identity_id=identity_id,
        )
        session.add(profile)
        await session.flush()
        return profile
