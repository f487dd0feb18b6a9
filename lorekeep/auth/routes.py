# =============================================================================
# Auth API Routes
# =============================================================================
#
# Endpoints:
#   POST /auth/register     - Create account
#   POST /auth/login        - Get tokens
#   POST /auth/logout       - Revoke the presented access token
#   GET  /auth/me           - Get current user
#
# register and login hash/verify passwords, so they are plain `def` handlers
# and run in FastAPI's threadpool.
#
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr, Field

from lorekeep.auth.context import AuthContext
from lorekeep.auth.credentials import UserResponse
from lorekeep.auth.jwt import TokenError, TokenPair
from lorekeep.auth.policies import authenticate, bearer_token
from lorekeep.core.errors import ErrorKind, ServiceError
from lorekeep.state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

PASSWORD_MIN_LENGTH = 6


# =============================================================================
# Request/Response Models
# =============================================================================

class AuthRequest(BaseModel):
    """Body of register and login."""
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Public Endpoints
# =============================================================================

@router.post("/register", response_model=UserResponse, status_code=201)
def register(data: AuthRequest, state: AppState = Depends(get_state)):
    """
    Create a new account.

    Fails with 409 if the email is already registered.
    """
    user = state.users.register(data.email, data.password)
    return UserResponse.from_user(user)


@router.post("/login", response_model=TokenPair)
def login(data: AuthRequest, state: AppState = Depends(get_state)):
    """
    Authenticate and get tokens.

    Unknown email and wrong password get the same answer.
    """
    user = state.users.authenticate(data.email, data.password)
    if not user:
        logger.info("Failed login attempt")
        raise ServiceError(ErrorKind.BAD_REQUEST, "Invalid email or password")

    pair = state.tokens.issue_token_pair(user)
    state.users.set_refresh_token(user.email, pair.refresh_token)

    logger.info(f"User {user.id} logged in")
    return pair


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str | None = Depends(bearer_token),
    state: AppState = Depends(get_state),
):
    """
    Revoke the presented token.

    The token is revoked whatever it contains. If it also verifies as an
    access token, the owner's stored refresh token is cleared.
    A request without a token gets the generic 404.
    """
    if not token:
        raise ServiceError(ErrorKind.NOT_FOUND, "Endpoint Not Found")

    state.revocations.revoke(token, state.tokens.peek_expiry(token))

    try:
        ctx = AuthContext.from_claims(state.tokens.verify(token), token)
    except (TokenError, KeyError, TypeError, ValueError):
        ctx = None

    if ctx is not None:
        if not state.users.set_refresh_token(ctx.email, None):
            logger.warning(f"Logout for unknown user {ctx.user_id}")
            raise ServiceError(ErrorKind.FORBIDDEN)
        logger.info(f"User {ctx.user_id} logged out")

    return MessageResponse(message="Logged out")


# =============================================================================
# Protected Endpoints
# =============================================================================

@router.get("/me", response_model=UserResponse)
async def get_current_user(
    ctx: AuthContext = Depends(authenticate),
    state: AppState = Depends(get_state),
):
    """
    Get the current authenticated user.
    """
    user = state.users.find_by_email(ctx.email)
    if not user or user.id != ctx.user_id:
        raise ServiceError(ErrorKind.NOT_FOUND, "User Not Found")

    return UserResponse.from_user(user)
