"""
Tests for the authentication gate and the role gate, without HTTP.
"""

from datetime import timedelta

import pytest

from lorekeep.auth.context import AuthContext
from lorekeep.auth.credentials import User
from lorekeep.auth.jwt import TokenIssuer
from lorekeep.auth.policies import has_role, resolve_identity
from lorekeep.auth.revocation import RevocationRegistry
from lorekeep.auth.roles import CHARACTER_WRITERS, Role
from lorekeep.core.errors import ErrorKind, ServiceError


@pytest.fixture
def registry():
    return RevocationRegistry()


@pytest.fixture
def user():
    return User(id=7, email="sam@shire.org", password_hash="x")


def _kind(token, registry, issuer) -> ErrorKind:
    with pytest.raises(ServiceError) as exc_info:
        resolve_identity(token, registry, issuer)
    return exc_info.value.kind


# =============================================================================
# Authentication Gate
# =============================================================================


class TestResolveIdentity:
    def test_valid_token(self, registry, issuer, user):
        token = issuer.issue_access_token(user)
        ctx = resolve_identity(token, registry, issuer)

        assert ctx == AuthContext(user_id=7, email="sam@shire.org", role="user", token=token)

    def test_missing_token(self, registry, issuer):
        assert _kind(None, registry, issuer) == ErrorKind.UNAUTHORIZED
        assert _kind("", registry, issuer) == ErrorKind.UNAUTHORIZED

    def test_revoked_token(self, registry, issuer, user):
        token = issuer.issue_access_token(user)
        registry.revoke(token)

        assert _kind(token, registry, issuer) == ErrorKind.REVOKED

    def test_revocation_checked_before_decoding(self, registry, issuer):
        # Not even a JWT, but revoked: must read as revoked, not invalid
        registry.revoke("garbage")
        assert _kind("garbage", registry, issuer) == ErrorKind.REVOKED

    def test_revoked_and_expired_reads_revoked(self, registry, issuer):
        token = issuer.issue({"sub": "1", "type": "access"}, timedelta(seconds=-5))
        registry.revoke(token)

        assert _kind(token, registry, issuer) == ErrorKind.REVOKED

    def test_expired_token(self, registry, issuer, user):
        token = issuer.issue(
            {"sub": "7", "id": 7, "email": user.email, "role": "user", "type": "access"},
            timedelta(seconds=-5),
        )
        assert _kind(token, registry, issuer) == ErrorKind.INVALID_TOKEN

    def test_bad_signature(self, registry, issuer, user):
        token = TokenIssuer("not-the-secret").issue_access_token(user)
        assert _kind(token, registry, issuer) == ErrorKind.INVALID_TOKEN

    def test_malformed(self, registry, issuer):
        assert _kind("abc.def.ghi", registry, issuer) == ErrorKind.INVALID_TOKEN

    def test_refresh_token_is_not_an_identity(self, registry, issuer, user):
        token = issuer.issue_refresh_token(user)
        assert _kind(token, registry, issuer) == ErrorKind.INVALID_TOKEN

    def test_missing_identity_claims(self, registry, issuer):
        token = issuer.issue({"sub": "7", "type": "access"}, timedelta(hours=1))
        assert _kind(token, registry, issuer) == ErrorKind.INVALID_TOKEN

    def test_gate_never_mutates_registry(self, registry, issuer, user):
        resolve_identity(issuer.issue_access_token(user), registry, issuer)
        assert len(registry) == 0


# =============================================================================
# Role Gate
# =============================================================================


class TestHasRole:
    @pytest.fixture
    def ctx(self):
        return lambda role: AuthContext(user_id=1, email="x@y.org", role=role, token="t")

    def test_member_roles(self, ctx):
        assert has_role(ctx("admin"), CHARACTER_WRITERS)
        assert has_role(ctx("user"), CHARACTER_WRITERS)

    def test_admin_only(self, ctx):
        assert has_role(ctx("admin"), {Role.ADMIN})
        assert not has_role(ctx("user"), {Role.ADMIN})

    def test_unknown_role(self, ctx):
        assert not has_role(ctx("guest"), CHARACTER_WRITERS)

    def test_plain_strings_accepted(self, ctx):
        assert has_role(ctx("user"), {"user"})

    def test_empty_set_allows_nobody(self, ctx):
        assert not has_role(ctx("admin"), set())
