"""
Authentication and authorization.

- jwt.py          token issue/verify, password hashing
- revocation.py   revoked-token registry
- credentials.py  user records
- policies.py     authentication gate and role gate for routes (import directly;
                  it depends on lorekeep.state)
- routes.py       /auth endpoints
"""

from lorekeep.auth.context import AuthContext
from lorekeep.auth.credentials import CredentialStore, User, UserResponse
from lorekeep.auth.jwt import (
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenIssuer,
    TokenPair,
    hash_password,
    verify_password,
)
from lorekeep.auth.revocation import RevocationRegistry
from lorekeep.auth.roles import CHARACTER_WRITERS, Role

__all__ = [
    "AuthContext",
    # Types
    "Role",
    "CHARACTER_WRITERS",
    "User",
    "UserResponse",
    "CredentialStore",
    "RevocationRegistry",
    # JWT
    "TokenIssuer",
    "TokenPair",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "hash_password",
    "verify_password",
]
