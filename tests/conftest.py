"""
Pytest fixtures for identity and document core tests.
"""

import hashlib
import hmac
import itertools
import secrets
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.config import Settings
from src.database import close_db, create_engine, create_session_maker, init_db
from src.kernel.identity.authenticator import Authenticator
from src.kernel.identity.credential_store import CredentialStore
from src.kernel.identity.jwt import TokenIssuer
from src.kernel.identity.registrar import Registrar
from src.storage.backends.memory import MemoryBackend
from src.storage.blob_store import BlobStore

TEST_SECRET_KEY = "test-secret-key-for-testing-only"
FROZEN_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


class FastHasher:
    """Salted SHA-256 stand-in for bcrypt. Insecure, test use only."""

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(8)
        digest = hashlib.sha256((salt + password).encode("utf-8")).hexdigest()
        return f"{salt}${digest}"

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        salt, _, digest = hashed_password.partition("$")
        expected = hashlib.sha256((salt + plain_password).encode("utf-8")).hexdigest()
        return hmac.compare_digest(digest, expected)


def counter_ids(prefix: str = "doc") -> Callable[[], str]:
    """Deterministic document ID factory: doc-1, doc-2, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a per-test SQLite file and in-memory storage."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET_KEY,
        storage_backend="memory",
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def db_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with the schema in place."""
    engine = create_engine(test_settings)
    await init_db(engine)

    yield engine

    await close_db(engine)


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_maker(db_engine)


@pytest.fixture
def credential_store(session_maker) -> CredentialStore:
    return CredentialStore(session_maker)


@pytest.fixture
def hasher() -> FastHasher:
    return FastHasher()


@pytest.fixture
def token_issuer() -> TokenIssuer:
    """Token issuer with a fixed key and a frozen clock."""
    return TokenIssuer(secret_key=TEST_SECRET_KEY, clock=lambda: FROZEN_NOW)


@pytest.fixture
def registrar(credential_store: CredentialStore, hasher: FastHasher) -> Registrar:
    return Registrar(credential_store, hasher)


@pytest.fixture
def authenticator(
    credential_store: CredentialStore,
    hasher: FastHasher,
    token_issuer: TokenIssuer,
) -> Authenticator:
    return Authenticator(credential_store, hasher, token_issuer)


@pytest.fixture
def memory_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def blob_store(memory_backend: MemoryBackend, id_factory) -> BlobStore:
    """Blob store with predictable IDs."""
    return BlobStore(memory_backend, id_factory=id_factory)


@pytest.fixture
def frozen_now() -> datetime:
    return FROZEN_NOW


@pytest.fixture
def secret_key() -> str:
    return TEST_SECRET_KEY


@pytest.fixture
def id_factory() -> Callable[[], str]:
    return counter_ids()
