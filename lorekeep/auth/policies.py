"""
Policies - the authentication and role gates for routes.

Usage in routes:
    ctx: AuthContext = Depends(authenticate)              # any identity
    ctx: AuthContext = Depends(require_roles(Role.ADMIN)) # identity + role

Gates raise ServiceError; the API layer turns that into the response, so a
handler only runs once every gate in front of it has passed.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from lorekeep.auth.context import AuthContext
from lorekeep.auth.jwt import TokenError, TokenIssuer
from lorekeep.auth.revocation import RevocationRegistry
from lorekeep.auth.roles import Role
from lorekeep.core.errors import ErrorKind, ServiceError
from lorekeep.state import AppState, get_state

logger = logging.getLogger(__name__)


# Bearer extraction that yields None instead of failing, so the gate decides
# what a missing or malformed header means.
optional_bearer = HTTPBearer(auto_error=False)


def bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_bearer),
) -> str | None:
    """Raw bearer token from the Authorization header, if any."""
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials


# =============================================================================
# Authentication Gate
# =============================================================================


def resolve_identity(
    token: str | None,
    revocations: RevocationRegistry,
    tokens: TokenIssuer,
) -> AuthContext:
    """
    Turn a raw bearer token into an identity, or fail.

    Checks, in order:
    1. No token                      -> UNAUTHORIZED (401)
    2. Token revoked                 -> REVOKED (403)
    3. Bad signature/expired/garbage -> INVALID_TOKEN (403)

    Revocation is looked up on the raw string, before any decoding, so a
    revoked token reads as revoked even while its signature is still good.
    """
    if not token:
        raise ServiceError(ErrorKind.UNAUTHORIZED)

    if revocations.is_revoked(token):
        raise ServiceError(ErrorKind.REVOKED)

    try:
        claims = tokens.verify(token)
        return AuthContext.from_claims(claims, token)
    except TokenError as e:
        logger.info(f"Rejected bearer token: {e}")
    except (KeyError, TypeError, ValueError):
        logger.info("Rejected bearer token: missing identity claims")
    raise ServiceError(ErrorKind.INVALID_TOKEN)


async def authenticate(
    token: str | None = Depends(bearer_token),
    state: AppState = Depends(get_state),
) -> AuthContext:
    """FastAPI dependency: the authentication gate."""
    return resolve_identity(token, state.revocations, state.tokens)


# =============================================================================
# Authorization Gate
# =============================================================================


def has_role(ctx: AuthContext, allowed: Iterable[Role | str]) -> bool:
    """Is the identity's role one of the allowed roles?"""
    allowed_values = {r.value if isinstance(r, Role) else r for r in allowed}
    return ctx.role in allowed_values


def require_roles(*roles: Role | str) -> Callable:
    """
    Require an authenticated identity whose role is in roles.

    Usage:
        @router.post("")
        async def create(ctx: AuthContext = Depends(require_roles(Role.ADMIN, Role.USER))):
            ...

    Returns:
        FastAPI Depends that resolves to AuthContext
    """
    allowed = frozenset(r.value if isinstance(r, Role) else r for r in roles)

    async def dependency(ctx: AuthContext = Depends(authenticate)) -> AuthContext:
        if not has_role(ctx, allowed):
            logger.info(f"User {ctx.user_id} with role {ctx.role!r} denied, needs one of {sorted(allowed)}")
            raise ServiceError(ErrorKind.ROLE_FORBIDDEN)
        return ctx

    return dependency
