"""
Tests for settings helpers and the Sentry event filter.
"""

from lorekeep.config import Settings
from lorekeep.core.errors import ErrorKind, ServiceError
from lorekeep.integrations.sentry import _filter_events, capture_exception, init_sentry


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("PORT", "JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "JWT_REFRESH_TOKEN_EXPIRE_DAYS"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 4000
        assert settings.jwt_access_token_expire_minutes == 60
        assert settings.jwt_refresh_token_expire_days == 1

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8123")
        monkeypatch.setenv("JWT_SECRET", "from-env")

        settings = Settings(_env_file=None)
        assert settings.port == 8123
        assert settings.jwt_secret == "from-env"
        assert not settings.uses_default_secret

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.org, http://b.org,")
        assert settings.cors_origins_list == ["http://a.org", "http://b.org"]


class TestSentry:
    def test_disabled_without_dsn(self, settings):
        assert init_sentry(settings) is False
        assert capture_exception(RuntimeError("x")) is None

    def test_expected_errors_dropped(self):
        exc = ServiceError(ErrorKind.REVOKED)
        assert _filter_events({}, {"exc_info": (type(exc), exc, None)}) is None

    def test_internal_errors_kept(self):
        exc = ServiceError(ErrorKind.INTERNAL)
        event = {"message": "boom"}
        assert _filter_events(event, {"exc_info": (type(exc), exc, None)}) == event

    def test_credentials_scrubbed(self):
        event = {"request": {"headers": {"Authorization": "Bearer abc", "Accept": "*/*"}}}
        filtered = _filter_events(event, {})

        assert filtered["request"]["headers"]["Authorization"] == "[Filtered]"
        assert filtered["request"]["headers"]["Accept"] == "*/*"
