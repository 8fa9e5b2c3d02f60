"""
Registration of new identities.
"""

from typing import Union

from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.errors import ConflictError
from src.kernel.identity.credential_store import CredentialStore
from src.kernel.identity.password import Hasher
from src.kernel.models.identity import ProfileRole
from src.logging_config import get_logger
from src.schemas.identity import IdentityRecord

logger = get_logger(__name__)


class Registrar:
    """
    Creates an identity together with its profile.

    Both records are written in one transaction. The email pre-check keeps
    the common duplicate case cheap; the database uniqueness constraint
    decides races between concurrent registrations.
    """

    def __init__(self, store: CredentialStore, hasher: Hasher):
        self.store = store
        self.hasher = hasher

    async def register(
        self,
        name: str,
        role: Union[ProfileRole, str],
        email: str,
        password: str,
    ) -> IdentityRecord:
        """
        Register a new identity.

        Args:
            name: Profile display name
            role: Profile role (ADMIN or USER)
            email: Unique login email, compared exactly
            password: Plain text password, already validated by the caller

        Returns:
            The created identity (no password hash)

        Raises:
            ConflictError: If the email is already registered
        """
        role = ProfileRole(role)

        existing = await self.store.get_identity_by_email(email)
        if existing:
            raise ConflictError("User already exists")

        password_hash = self.hasher.hash(password)

        async def create_identity_and_profile(session: AsyncSession) -> IdentityRecord:
            identity = await self.store.add_identity(session, email, password_hash)
            await self.store.add_profile(session, identity.id, name, role)
            return IdentityRecord(
                id=identity.id,
                email=identity.email,
                name=name,
                role=role.value,
                created_at=identity.created_at,
            )

        try:
            record = await self.store.run_atomic(create_identity_and_profile)
        except ConflictError as exc:
            logger.info("Registration lost race on existing email")
            raise ConflictError("User already exists") from exc

        logger.info(
            "Identity registered",
            extra={"identity_id": str(record.id), "role": record.role},
        )
        return record
