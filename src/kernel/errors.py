"""
Typed errors raised by the core.

Each error carries the HTTP status code the request layer should answer with
and a public ``detail`` that is safe to send to clients.
"""

from typing import Optional


class CoreError(Exception):
    """Base class for all errors surfaced to the request layer."""

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ConflictError(CoreError):
    """A uniqueness rule was violated."""

    status_code = 409
    default_detail = "User already exists"


class NotFoundError(CoreError):
    """The addressed record or object does not exist."""

    status_code = 404
    default_detail = "Not found"


class ForbiddenError(CoreError):
    """Credentials were presented but rejected."""

    status_code = 403
    default_detail = "Invalid password"


class InvalidCredentialsError(ForbiddenError):
    """Unknown email or wrong password, deliberately indistinguishable."""

    default_detail = "Invalid email or password"


class InternalError(CoreError):
    """Configuration or backend failure. Detail never names the cause."""

    status_code = 500
    default_detail = "Internal server error"


class SigningKeyMissingError(InternalError):
    """No token signing secret is configured."""


class StorageError(InternalError):
    """The object backend rejected an operation."""


class StorageUnavailableError(StorageError):
    """The object backend could not be reached."""

    status_code = 503
    default_detail = "Storage unavailable"
