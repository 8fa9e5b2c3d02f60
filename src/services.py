"""
Service container with an explicit startup/shutdown lifecycle.

The request layer starts the services once per process and hands the
components to its handlers:

    async with lifespan() as services:
        identity = await services.registrar.register(name, role, email, password)
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import timedelta
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from src.config import Settings, get_settings
from src.database import close_db, create_engine, create_session_maker, init_db
from src.kernel.identity.authenticator import Authenticator
from src.kernel.identity.credential_store import CredentialStore
from src.kernel.identity.jwt import TokenIssuer
from src.kernel.identity.password import Hasher, PasswordHasher
from src.kernel.identity.registrar import Registrar
from src.logging_config import configure_logging, get_logger
from src.storage.backends.memory import MemoryBackend
from src.storage.backends.s3 import S3Backend
from src.storage.base import ObjectBackend
from src.storage.blob_store import BlobStore

logger = get_logger(__name__)


def build_backend(settings: Settings) -> ObjectBackend:
    """Object backend selected by STORAGE_BACKEND."""
    if settings.storage_backend == "memory":
        return MemoryBackend()
    if settings.storage_backend == "s3":
        return S3Backend.from_settings(settings)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


@dataclass
class Services:
    """Process-wide components, wired once at startup."""

    settings: Settings
    engine: AsyncEngine
    backend: ObjectBackend
    credential_store: CredentialStore
    token_issuer: TokenIssuer
    registrar: Registrar
    authenticator: Authenticator
    blob_store: BlobStore

    @classmethod
    async def start(
        cls,
        settings: Optional[Settings] = None,
        backend: Optional[ObjectBackend] = None,
        hasher: Optional[Hasher] = None,
    ) -> "Services":
        """
        Open connections and build every component.

        Args:
            settings: Configuration, defaults to the environment
            backend: Object backend override (defaults per STORAGE_BACKEND)
            hasher: Password hasher override (defaults to bcrypt)
        """
        if settings is None:
            settings = get_settings()
        if backend is None:
            backend = build_backend(settings)
        if hasher is None:
            hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

        engine = create_engine(settings)
        try:
            if settings.db_create_all:
                await init_db(engine)
            logger.info("Database initialized")

            await backend.start()
            if settings.storage_create_bucket and isinstance(backend, S3Backend):
                await backend.ensure_bucket()
        except Exception:
            await close_db(engine)
            raise

        if not settings.jwt_secret:
            logger.warning("JWT_SECRET is not set; logins will fail until it is configured")

        store = CredentialStore(create_session_maker(engine))
        token_issuer = TokenIssuer(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(minutes=settings.access_token_expire_minutes),
        )

        return cls(
            settings=settings,
            engine=engine,
            backend=backend,
            credential_store=store,
            token_issuer=token_issuer,
            registrar=Registrar(store, hasher),
            authenticator=Authenticator(
                store,
                hasher,
                token_issuer,
                reveal_unknown_email=settings.login_reveal_unknown_email,
            ),
            blob_store=BlobStore(backend),
        )

    async def close(self) -> None:
        """Release the object backend client and database connections."""
        logger.info("Shutting down...")
        try:
            await self.backend.close()
        finally:
            await close_db(self.engine)
        logger.info("Connections closed")


@asynccontextmanager
async def lifespan(
    settings: Optional[Settings] = None,
    backend: Optional[ObjectBackend] = None,
    hasher: Optional[Hasher] = None,
) -> AsyncIterator[Services]:
    """Configure logging, start services, and close them on exit."""
    if settings is None:
        settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )
    logger.info("Starting %s v%s", settings.project_name, settings.version)

    services = await Services.start(settings, backend=backend, hasher=hasher)
    try:
        yield services
    finally:
        await services.close()
