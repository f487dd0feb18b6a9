"""
Shared fixtures.

Every test gets a fresh app with its own stores, a fixed signing secret and
a cheap password hash.
"""

import os

# Importing lorekeep.api.app builds the module-level app from the environment
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from lorekeep.api.app import create_app  # noqa: E402
from lorekeep.auth.jwt import TokenIssuer  # noqa: E402
from lorekeep.config import Settings  # noqa: E402


TEST_SECRET = "test-secret-key-for-testing-only"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Settings with a fixed secret and fast hashing."""
    return Settings(
        environment="test",
        jwt_secret=TEST_SECRET,
        password_hash_iterations=1_000,
        sentry_dsn="",
    )


@pytest.fixture
def issuer(settings):
    return TokenIssuer.from_settings(settings)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def state(app):
    """The app's stores, issuer and revocation registry."""
    return app.state.services


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def credentials():
    return {"email": "a@b.com", "password": "secret1"}


@pytest.fixture
def registered(client, credentials):
    """A registered user; returns the register response body."""
    response = client.post("/auth/register", json=credentials)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def tokens(client, credentials, registered):
    """Login response body: {"accessToken", "refreshToken"}."""
    response = client.post("/auth/login", json=credentials)
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def auth_headers(tokens):
    return {"Authorization": f"Bearer {tokens['accessToken']}"}
