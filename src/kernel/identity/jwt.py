"""
JWT token issuance for authenticated identities.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Union

from jose import JWTError, jwt
from pydantic import BaseModel

from src.kernel.errors import SigningKeyMissingError
from src.logging_config import get_logger

logger = get_logger(__name__)

# Fixed validity window for access tokens
ACCESS_TOKEN_LIFETIME = timedelta(hours=2)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenClaims(BaseModel):
    """Decoded token payload."""

    sub: str  # Identity ID
    role: str
    iat: datetime
    exp: datetime


class IssuedToken(BaseModel):
    """A signed token with its validity window."""

    token: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """
    Signs bounded-lifetime assertions binding a subject to a role.

    Claims carry no random component, so the token is fully determined by
    the key, subject, role and issuance time.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        algorithm: str = "HS256",
        lifetime: timedelta = ACCESS_TOKEN_LIFETIME,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime
        self.clock = clock

    def issue(
        self,
        subject_id: Union[uuid.UUID, str],
        role: str,
        now: Optional[datetime] = None,
    ) -> IssuedToken:
        """
        Sign a token for a subject.

        Args:
            subject_id: Identity ID placed in the ``sub`` claim
            role: Profile role placed in the ``role`` claim
            now: Issuance time, defaults to the configured clock

        Returns:
            IssuedToken with the encoded token and its validity window

        Raises:
            SigningKeyMissingError: If no signing secret is configured
        """
        if not self.secret_key:
            logger.error("Token signing secret is not configured")
            raise SigningKeyMissingError()

        issued_at = (now or self.clock()).replace(microsecond=0)
        expires_at = issued_at + self.lifetime

        payload = {
            "sub": str(subject_id),
            "role": role,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def decode(self, token: str, verify_exp: bool = True) -> Optional[TokenClaims]:
        """
        Verify and decode a token.

        Args:
            token: Encoded JWT
            verify_exp: Reject expired tokens when True

        Returns:
            TokenClaims if valid, None otherwise
        """
        if not self.secret_key:
            raise SigningKeyMissingError()

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": verify_exp},
            )
        except JWTError:
            return None

        return TokenClaims(
            sub=payload["sub"],
            role=payload["role"],
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
