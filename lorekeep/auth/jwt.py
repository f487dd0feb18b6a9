# =============================================================================
# JWT Authentication Implementation
# =============================================================================
#
# This module provides:
#   - Password hashing
#   - Token creation (access + refresh)
#   - Token validation (signature + expiry only, never revocation)
#
# The signing secret is handed to TokenIssuer explicitly; nothing here reads
# settings at import time.
#
# =============================================================================

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, TYPE_CHECKING
import secrets
import hashlib
import logging

from pydantic import BaseModel, ConfigDict, Field
import jwt

from lorekeep.config import Settings
from lorekeep.core.errors import ConfigurationError
from lorekeep.core.utils import utc_now

if TYPE_CHECKING:
    from lorekeep.auth.credentials import User

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"

DEFAULT_HASH_ITERATIONS = 100_000


# =============================================================================
# Models
# =============================================================================

class TokenPair(BaseModel):
    """Access and refresh token pair, as returned by /auth/login."""
    
    model_config = ConfigDict(populate_by_name=True)
    
    access_token: str = Field(alias="accessToken")
    refresh_token: str = Field(alias="refreshToken")


# =============================================================================
# Password Hashing
# =============================================================================

def hash_password(password: str, iterations: int = DEFAULT_HASH_ITERATIONS) -> str:
    """
    Hash a password using salted PBKDF2-SHA256.
    
    Returns: iterations:salt:hash format string
    """
    salt = secrets.token_hex(32)
    hash_bytes = hashlib.pbkdf2_hmac(
        'sha256',
        password.encode('utf-8'),
        salt.encode('utf-8'),
        iterations=iterations,
    )
    return f"{iterations}:{salt}:{hash_bytes.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        iterations, salt, stored_hash = password_hash.split(':')
        hash_bytes = hashlib.pbkdf2_hmac(
            'sha256',
            password.encode('utf-8'),
            salt.encode('utf-8'),
            iterations=int(iterations),
        )
        return secrets.compare_digest(hash_bytes.hex(), stored_hash)
    except (ValueError, AttributeError):
        return False


# =============================================================================
# Token Errors
# =============================================================================

class TokenError(Exception):
    """Base exception for token errors."""
    pass


class TokenExpiredError(TokenError):
    """Token has expired."""
    pass


class TokenInvalidError(TokenError):
    """Token is invalid or malformed."""
    pass


# =============================================================================
# Issuer / Verifier
# =============================================================================

class TokenIssuer:
    """
    Creates and verifies signed session tokens.
    
    Verification covers signature, expiry and token type. Whether a token
    was revoked is the caller's question (see RevocationRegistry).
    """
    
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_lifetime: timedelta = timedelta(hours=1),
        refresh_lifetime: timedelta = timedelta(days=1),
    ):
        if not secret:
            raise ConfigurationError("JWT signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.access_lifetime = access_lifetime
        self.refresh_lifetime = refresh_lifetime
    
    @classmethod
    def from_settings(cls, settings: Settings) -> TokenIssuer:
        """
        Build an issuer from settings.
        
        The built-in development secret is refused in production and
        warned about everywhere else.
        """
        if settings.uses_default_secret:
            if settings.is_production:
                raise ConfigurationError(
                    "JWT_SECRET must be set when ENVIRONMENT=production"
                )
            logger.warning(
                "JWT_SECRET not set - signing with the built-in development secret. "
                "Never run like this in production."
            )
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            access_lifetime=timedelta(minutes=settings.jwt_access_token_expire_minutes),
            refresh_lifetime=timedelta(days=settings.jwt_refresh_token_expire_days),
        )
    
    def issue(self, claims: dict[str, Any], lifetime: timedelta) -> str:
        """Sign claims with iat/exp/jti added; exp = now + lifetime."""
        now = utc_now()
        payload = {
            **claims,
            "iat": now,
            "exp": now + lifetime,
            "jti": secrets.token_hex(8),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)
    
    def issue_access_token(self, user: User) -> str:
        """Access token carrying identity and role."""
        return self.issue(
            {
                "sub": str(user.id),
                "id": user.id,
                "email": user.email,
                "role": user.role.value,
                "type": ACCESS,
            },
            self.access_lifetime,
        )
    
    def issue_refresh_token(self, user: User) -> str:
        """Refresh token carrying the user id only."""
        return self.issue(
            {"sub": str(user.id), "id": user.id, "type": REFRESH},
            self.refresh_lifetime,
        )
    
    def issue_token_pair(self, user: User) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access_token(user),
            refresh_token=self.issue_refresh_token(user),
        )
    
    def verify(self, token: str, expected_type: str | None = ACCESS) -> dict[str, Any]:
        """
        Decode and validate a token.
        
        Args:
            token: The JWT string
            expected_type: "access", "refresh", or None to accept either
        
        Returns:
            The decoded claims
        
        Raises:
            TokenExpiredError: Token has expired
            TokenInvalidError: Bad signature, malformed, or wrong type
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")
        
        if expected_type and payload.get("type") != expected_type:
            raise TokenInvalidError(f"Expected {expected_type} token, got {payload.get('type')}")
        
        return payload
    
    def peek_expiry(self, token: str) -> datetime | None:
        """
        Read exp without checking the signature.
        
        Only for bookkeeping (pruning revoked tokens), never for trust.
        """
        try:
            payload = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError:
            return None
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            return None
        try:
            return datetime.fromtimestamp(exp, tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            # Out of range or NaN
            return None
