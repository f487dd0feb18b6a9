"""
Application state - every process-wide collaborator, built once per app.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from lorekeep.auth.credentials import CredentialStore
from lorekeep.auth.jwt import TokenIssuer
from lorekeep.auth.revocation import RevocationRegistry
from lorekeep.characters.store import CharacterStore
from lorekeep.config import Settings


@dataclass
class AppState:
    """Stores, token issuer and revocation registry for one app instance."""

    settings: Settings
    users: CredentialStore
    characters: CharacterStore
    tokens: TokenIssuer
    revocations: RevocationRegistry

    @classmethod
    def from_settings(cls, settings: Settings) -> AppState:
        return cls(
            settings=settings,
            users=CredentialStore(hash_iterations=settings.password_hash_iterations),
            characters=CharacterStore(),
            tokens=TokenIssuer.from_settings(settings),
            revocations=RevocationRegistry(),
        )


def get_state(request: Request) -> AppState:
    """FastAPI dependency returning the app's state."""
    return request.app.state.services
