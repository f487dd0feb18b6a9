"""
Auth context - who is making the request.

Produced by the authentication gate and handed to route handlers and the
role gate. Never built from anything but verified claims.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AuthContext:
    """Identity attached to an authenticated request."""
    
    user_id: int
    email: str
    role: str
    token: str
    
    @classmethod
    def from_claims(cls, claims: dict[str, Any], token: str) -> AuthContext:
        """
        Build from verified access-token claims.
        
        Raises KeyError/TypeError/ValueError when a claim is missing or
        mistyped; the gate treats that as an invalid token.
        """
        return cls(
            user_id=int(claims["id"]),
            email=str(claims["email"]),
            role=str(claims["role"]),
            token=token,
        )
