"""
Roles.

A user's role is fixed at registration. Routes declare which roles they
accept; the checking happens in policies.py.
"""

from enum import Enum


class Role(str, Enum):
    """Platform-wide role carried in every access token."""
    
    ADMIN = "admin"
    USER = "user"


# Roles allowed to create, replace and delete characters
CHARACTER_WRITERS: frozenset[Role] = frozenset({Role.ADMIN, Role.USER})
