"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from snippetbox.core.config import Settings

GOOD_SECRET = "config-test-secret-2f8a6c4e0b9d7f1a3c5e"


@pytest.fixture
def env(monkeypatch):
    """Start every test from a clean, known environment."""
    for name in (
        "JWT_SECRET_KEY",
        "JWT_ALGORITHM",
        "JWT_TOKEN_EXPIRE_MINUTES",
        "RATE_LIMIT_PER_SECOND",
        "RATE_LIMIT_BURST",
        "RATE_LIMIT_ENABLED",
        "OWNERSHIP_LOOKUP_TIMEOUT_SECONDS",
        "DATABASE_URL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestSecret:
    """The signing secret is required and must be usable."""

    def test_missing_secret_fails(self, env):
        with pytest.raises(ValidationError):
            _settings()

    def test_secret_from_environment(self, env):
        env.setenv("JWT_SECRET_KEY", GOOD_SECRET)
        assert _settings().jwt_secret_key == GOOD_SECRET

    @pytest.mark.parametrize(
        "secret",
        [
            "too-short",
            "a" * 40,
            "secret",
        ],
    )
    def test_unusable_secret_fails(self, env, secret):
        env.setenv("JWT_SECRET_KEY", secret)
        with pytest.raises(ValidationError):
            _settings()


class TestDefaults:
    def test_defaults(self, env):
        env.setenv("JWT_SECRET_KEY", GOOD_SECRET)
        config = _settings()

        assert config.jwt_algorithm == "HS256"
        assert config.jwt_token_expire_minutes == 24 * 60
        assert config.rate_limit_per_second == 1.0
        assert config.rate_limit_burst == 5
        assert config.rate_limit_enabled is True
        assert config.ownership_lookup_timeout_seconds == 5.0
        assert config.is_sqlite is False

    def test_overrides_from_environment(self, env):
        env.setenv("JWT_SECRET_KEY", GOOD_SECRET)
        env.setenv("RATE_LIMIT_PER_SECOND", "2.5")
        env.setenv("RATE_LIMIT_BURST", "10")
        env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./snippets.db")
        env.setenv("LOG_LEVEL", "debug")
        config = _settings()

        assert config.rate_limit_per_second == 2.5
        assert config.rate_limit_burst == 10
        assert config.is_sqlite is True
        assert config.log_level == "DEBUG"


class TestValidation:
    @pytest.mark.parametrize(
        "name,value",
        [
            ("JWT_ALGORITHM", "none"),
            ("JWT_ALGORITHM", "RS256"),
            ("RATE_LIMIT_PER_SECOND", "0"),
            ("RATE_LIMIT_BURST", "0"),
            ("JWT_TOKEN_EXPIRE_MINUTES", "0"),
            ("OWNERSHIP_LOOKUP_TIMEOUT_SECONDS", "-1"),
            ("LOG_LEVEL", "LOUD"),
        ],
    )
    def test_invalid_values_rejected(self, env, name, value):
        env.setenv("JWT_SECRET_KEY", GOOD_SECRET)
        env.setenv(name, value)
        with pytest.raises(ValidationError):
            _settings()
