"""
Error taxonomy.

Every expected failure is a ServiceError tagged with an ErrorKind. The API
layer renders all of them through STATUS_BY_KIND, so handlers never pick
status codes themselves.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """What went wrong, independent of transport."""
    
    BAD_REQUEST = "bad_request"        # malformed or schema-invalid payload
    UNAUTHORIZED = "unauthorized"      # no credential presented
    REVOKED = "revoked"                # token explicitly revoked
    INVALID_TOKEN = "invalid_token"    # bad signature, malformed or expired
    ROLE_FORBIDDEN = "role_forbidden"  # authenticated but wrong role
    FORBIDDEN = "forbidden"            # any other refusal
    NOT_FOUND = "not_found"            # resource or route
    CONFLICT = "conflict"              # duplicate registration
    INTERNAL = "internal"              # unexpected store/crypto failure


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.REVOKED: 403,
    ErrorKind.INVALID_TOKEN: 403,
    ErrorKind.ROLE_FORBIDDEN: 403,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.BAD_REQUEST: "Bad Request",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.REVOKED: "Revoked",
    ErrorKind.INVALID_TOKEN: "Forbidden",
    ErrorKind.ROLE_FORBIDDEN: "Role Forbidden",
    ErrorKind.FORBIDDEN: "Forbidden",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.INTERNAL: "Internal Server Error",
}


class ServiceError(Exception):
    """A failure that maps to a client-visible response."""
    
    def __init__(self, kind: ErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)
    
    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]
    
    def __repr__(self) -> str:
        return f"ServiceError({self.kind.value!r}, {self.message!r})"


class ConfigurationError(RuntimeError):
    """Process configuration is unusable (raised at startup, never per request)."""
