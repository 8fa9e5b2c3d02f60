"""Integration tests for login against a SQLite database."""

from datetime import timedelta

import pytest

from src.kernel.errors import ForbiddenError, InvalidCredentialsError, NotFoundError
from src.kernel.identity.authenticator import Authenticator


class TestLogin:
    """Register-then-login flows."""

    async def test_login_with_registration_password(
        self, registrar, authenticator, token_issuer, frozen_now
    ):
        identity = await registrar.register("Ada", "ADMIN", "ada@example.com", "CorrectHorse42")

        result = await authenticator.login("ada@example.com", "CorrectHorse42")

        assert result.subject_id == identity.id
        claims = token_issuer.decode(result.token, verify_exp=False)
        assert claims.sub == str(identity.id)
        assert claims.role == "ADMIN"
        assert claims.iat == frozen_now
        assert claims.exp == frozen_now + timedelta(hours=2)

    async def test_login_wrong_password(self, registrar, authenticator):
        await registrar.register("Ada", "USER", "ada@example.com", "CorrectHorse42")

        with pytest.raises(ForbiddenError):
            await authenticator.login("ada@example.com", "correcthorse42")

    async def test_login_unregistered_email(self, registrar, authenticator):
        await registrar.register("Ada", "USER", "ada@example.com", "CorrectHorse42")

        with pytest.raises(NotFoundError):
            await authenticator.login("grace@example.com", "CorrectHorse42")

    async def test_collapsed_failures(self, registrar, credential_store, hasher, token_issuer):
        authenticator = Authenticator(
            credential_store, hasher, token_issuer, reveal_unknown_email=False
        )
        await registrar.register("Ada", "USER", "ada@example.com", "CorrectHorse42")

        with pytest.raises(InvalidCredentialsError):
            await authenticator.login("grace@example.com", "CorrectHorse42")
        with pytest.raises(InvalidCredentialsError):
            await authenticator.login("ada@example.com", "nope")

    async def test_find_credentials_joins_profile_role(self, registrar, credential_store):
        identity = await registrar.register("Ada", "ADMIN", "ada@example.com", "CorrectHorse42")

        stored = await credential_store.find_credentials("ada@example.com")

        assert stored.identity_id == identity.id
        assert stored.role == "ADMIN"
        assert await credential_store.find_credentials("missing@example.com") is None
