"""Unit tests for token issuance."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from src.kernel.errors import InternalError, SigningKeyMissingError
from src.kernel.identity.jwt import ACCESS_TOKEN_LIFETIME, TokenIssuer


class TestTokenIssuer:
    """Tests for TokenIssuer."""

    def test_claims_bind_subject_and_role(self, token_issuer, secret_key, frozen_now):
        subject = uuid.uuid4()
        issued = token_issuer.issue(subject, "ADMIN")

        payload = jwt.decode(
            issued.token,
            secret_key,
            algorithms=["HS256"],
            options={"verify_exp": False},
        )
        assert payload["sub"] == str(subject)
        assert payload["role"] == "ADMIN"
        assert payload["iat"] == int(frozen_now.timestamp())

    def test_expiry_is_two_hours_after_issuance(self, token_issuer, frozen_now):
        issued = token_issuer.issue(uuid.uuid4(), "USER")

        assert ACCESS_TOKEN_LIFETIME == timedelta(hours=2)
        assert issued.issued_at == frozen_now
        assert issued.expires_at == frozen_now + timedelta(hours=2)

        claims = token_issuer.decode(issued.token, verify_exp=False)
        assert claims.exp - claims.iat == timedelta(hours=2)

    def test_deterministic_for_fixed_inputs(self, token_issuer):
        """Same key, subject, role and time produce the same token."""
        subject = uuid.uuid4()

        first = token_issuer.issue(subject, "USER")
        second = token_issuer.issue(subject, "USER")

        assert first.token == second.token

    def test_different_role_changes_token(self, token_issuer):
        subject = uuid.uuid4()

        assert token_issuer.issue(subject, "USER").token != token_issuer.issue(subject, "ADMIN").token

    def test_explicit_issue_time_overrides_clock(self, token_issuer):
        at = datetime(2030, 6, 1, 8, 0, 0, 123456, tzinfo=timezone.utc)

        issued = token_issuer.issue(uuid.uuid4(), "USER", now=at)

        assert issued.issued_at == at.replace(microsecond=0)

    @pytest.mark.parametrize("secret", [None, ""])
    def test_missing_secret_is_internal_error(self, secret):
        issuer = TokenIssuer(secret_key=secret)

        with pytest.raises(SigningKeyMissingError) as exc_info:
            issuer.issue(uuid.uuid4(), "USER")

        assert isinstance(exc_info.value, InternalError)
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Internal server error"

    def test_decode_fresh_token(self, secret_key):
        issuer = TokenIssuer(secret_key=secret_key)
        subject = uuid.uuid4()

        claims = issuer.decode(issuer.issue(subject, "USER").token)

        assert claims is not None
        assert claims.sub == str(subject)
        assert claims.role == "USER"

    def test_decode_rejects_expired_token(self, token_issuer):
        """A token issued three hours ago has expired."""
        stale = TokenIssuer(
            secret_key=token_issuer.secret_key,
            clock=lambda: datetime.now(timezone.utc) - timedelta(hours=3),
        )
        token = stale.issue(uuid.uuid4(), "USER").token

        assert stale.decode(token) is None
        assert stale.decode(token, verify_exp=False) is not None

    def test_decode_rejects_other_key(self, secret_key):
        issuer = TokenIssuer(secret_key=secret_key)
        other = TokenIssuer(secret_key="another-secret-key")

        token = issuer.issue(uuid.uuid4(), "USER").token

        assert other.decode(token) is None

    def test_decode_rejects_tampered_token(self, secret_key):
        issuer = TokenIssuer(secret_key=secret_key)
        token = issuer.issue(uuid.uuid4(), "USER").token
        header, payload, signature = token.split(".")
        forged = jwt.encode(
            {"sub": "someone-else", "role": "ADMIN", "iat": 0, "exp": 2**31},
            "guessed-key",
            algorithm="HS256",
        ).split(".")[1]

        assert issuer.decode(f"{header}.{forged}.{signature}") is None
