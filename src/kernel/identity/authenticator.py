"""
Login: credential lookup, password verification and token issuance.
"""

from src.kernel.errors import ForbiddenError, InvalidCredentialsError, NotFoundError
from src.kernel.identity.credential_store import CredentialStore
from src.kernel.identity.jwt import TokenIssuer
from src.kernel.identity.password import Hasher
from src.logging_config import get_logger
from src.schemas.identity import LoginResult

logger = get_logger(__name__)


class Authenticator:
    """
    Verifies a login and issues a token.

    With ``reveal_unknown_email`` (the default) an unknown email raises
    NotFoundError and a wrong password raises ForbiddenError. With it off,
    both raise InvalidCredentialsError and an unknown email still pays for
    one hash verification.
    """

    def __init__(
        self,
        store: CredentialStore,
        hasher: Hasher,
        token_issuer: TokenIssuer,
        reveal_unknown_email: bool = True,
    ):
        self.store = store
        self.hasher = hasher
        self.token_issuer = token_issuer
        self.reveal_unknown_email = reveal_unknown_email
        self._dummy_hash = None if reveal_unknown_email else hasher.hash("dummy-password")

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate an identity and return a signed token.

        Args:
            email: Login email
            password: Plain text password

        Returns:
            LoginResult with the token and the identity ID

        Raises:
            NotFoundError: Unknown email (only when reveal_unknown_email)
            ForbiddenError: Password mismatch
            InternalError: Token signing is not configured
        """
        credentials = await self.store.find_credentials(email)

        if credentials is None:
            logger.info("Login for unknown email")
            if self.reveal_unknown_email:
                raise NotFoundError("User not found")
            self.hasher.verify(password, self._dummy_hash)
            raise InvalidCredentialsError()

        if not self.hasher.verify(password, credentials.password_hash):
            logger.info(
                "Login rejected: wrong password",
                extra={"identity_id": str(credentials.identity_id)},
            )
            if self.reveal_unknown_email:
                raise ForbiddenError("Invalid password")
            raise InvalidCredentialsError()

        issued = self.token_issuer.issue(credentials.identity_id, credentials.role)

        logger.info(
            "Login succeeded",
            extra={"identity_id": str(credentials.identity_id)},
        )
        return LoginResult(token=issued.token, subject_id=credentials.identity_id)
