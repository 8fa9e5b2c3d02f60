"""
Identity Core - Registration, login and token issuance.
"""

from src.kernel.identity.password import Hasher, PasswordHasher, verify_password, hash_password
from src.kernel.identity.jwt import (
    ACCESS_TOKEN_LIFETIME,
    IssuedToken,
    TokenClaims,
    TokenIssuer,
)
from src.kernel.identity.credential_store import CredentialStore, StoredCredentials
from src.kernel.identity.registrar import Registrar
from src.kernel.identity.authenticator import Authenticator

__all__ = [
    "Hasher",
    "PasswordHasher",
    "verify_password",
    "hash_password",
    "ACCESS_TOKEN_LIFETIME",
    "IssuedToken",
    "TokenClaims",
    "TokenIssuer",
    "CredentialStore",
    "StoredCredentials",
    "Registrar",
    "Authenticator",
]
