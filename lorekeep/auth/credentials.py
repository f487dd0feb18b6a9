"""
Credential store - user records and password checks.

Users are keyed by email (exact, case-sensitive match). Password hashing
happens before any store call so the store lock is never held while hashing.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from lorekeep.auth.jwt import DEFAULT_HASH_ITERATIONS, hash_password, verify_password
from lorekeep.auth.roles import Role
from lorekeep.core.errors import ErrorKind, ServiceError
from lorekeep.core.utils import MonotonicIdGenerator
from lorekeep.storage import InMemoryKeyedStore, KeyedStore

logger = logging.getLogger(__name__)


# =============================================================================
# Models
# =============================================================================

class User(BaseModel):
    """User stored in the credential store."""
    
    model_config = ConfigDict(frozen=True)
    
    id: int
    email: str
    password_hash: str
    role: Role = Role.USER
    refresh_token: str | None = None


class UserResponse(BaseModel):
    """User data returned to client (no sensitive fields)."""
    
    id: int
    email: str
    role: Role
    
    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(id=user.id, email=user.email, role=user.role)


# =============================================================================
# Store
# =============================================================================

class CredentialStore:
    """Owns every user record."""
    
    def __init__(
        self,
        store: KeyedStore[str, User] | None = None,
        hash_iterations: int = DEFAULT_HASH_ITERATIONS,
        ids: MonotonicIdGenerator | None = None,
    ):
        self._users: KeyedStore[str, User] = store if store is not None else InMemoryKeyedStore()
        self._hash_iterations = hash_iterations
        self._ids = ids or MonotonicIdGenerator()
    
    def register(self, email: str, password: str, role: Role = Role.USER) -> User:
        """
        Create a new user.
        
        Raises:
            ServiceError(CONFLICT): the email is already registered. The
            existing record is left untouched.
        """
        password_hash = hash_password(password, self._hash_iterations)
        user = User(
            id=self._ids.next_id(),
            email=email,
            password_hash=password_hash,
            role=role,
        )
        if not self._users.insert_if_absent(email, user):
            logger.info("Registration rejected, email already registered")
            raise ServiceError(ErrorKind.CONFLICT, "Email already registered")
        
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user
    
    def find_by_email(self, email: str) -> User | None:
        return self._users.get(email)
    
    def verify_password(self, user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)
    
    def authenticate(self, email: str, password: str) -> User | None:
        """
        Authenticate user by email and password.
        
        Unknown email and wrong password both come back as None.
        """
        user = self.find_by_email(email)
        if not user:
            return None
        if not self.verify_password(user, password):
            return None
        return user
    
    def set_refresh_token(self, email: str, token: str | None) -> bool:
        """
        Set or clear the user's refresh token.
        
        Returns False if no user has this email.
        """
        updated = self._users.update(
            email, lambda user: user.model_copy(update={"refresh_token": token})
        )
        return updated is not None
    
    def __len__(self) -> int:
        return len(self._users)
