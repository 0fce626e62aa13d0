"""Tests for application settings validation."""

import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError

from src.config.settings import Settings

BASE = {
    "environment": "development",
    "database_url": "sqlite+aiosqlite:///./settings_test.db",
    "secret_key": "settings-test-secret",
}


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**BASE, **overrides})


class TestRequiredSettings:
    """Test mandatory values and their validation."""

    def test_minimal_settings(self):
        """Test that the required values are enough to build settings."""
        s = make_settings()
        assert s.jwt_algorithm == "HS256"
        assert s.jwt_issuer == "ika"
        assert s.access_token_expire_minutes == 60
        assert s.refresh_token_expire_days == 60

    def test_environment_is_normalized(self):
        """Test that the environment name is case-insensitive."""
        assert make_settings(environment="STAGING").environment == "staging"

    def test_unknown_environment_rejected(self):
        """Test that unknown environments are rejected."""
        with pytest.raises(ValidationError, match="Environment must be one of"):
            make_settings(environment="qa")

    def test_empty_secret_rejected(self):
        """Test that a blank signing secret is rejected."""
        with pytest.raises(ValidationError, match="SECRET_KEY must not be empty"):
            make_settings(secret_key="   ")

    @pytest.mark.parametrize("algorithm", ["hs256", "HS384", "HS512"])
    def test_hmac_algorithms_accepted(self, algorithm):
        """Test that HMAC algorithms are accepted and upper-cased."""
        assert make_settings(jwt_algorithm=algorithm).jwt_algorithm == algorithm.upper()

    @pytest.mark.parametrize("algorithm", ["RS256", "none", "ES256"])
    def test_other_algorithms_rejected(self, algorithm):
        """Test that asymmetric and unsigned algorithms are rejected."""
        with pytest.raises(ValidationError, match="JWT algorithm must be one of"):
            make_settings(jwt_algorithm=algorithm)


class TestDatabaseSettings:
    def test_sqlite_detection(self):
        assert make_settings().is_sqlite is True
        assert make_settings(database_url="postgresql+asyncpg://u:p@localhost/ika").is_sqlite is False


class TestCORSSettings:
    """Test CORS list parsing and production safety."""

    def test_lists_are_split_and_trimmed(self):
        """Test that comma-separated values are parsed into lists."""
        s = make_settings(cors_allow_origins=" https://a.example.com , https://b.example.com ,")
        assert s.cors_origins == ["https://a.example.com", "https://b.example.com"]
        assert "Authorization" in s.cors_headers
        assert "OPTIONS" in s.cors_methods

    def test_wildcard_allowed_in_development(self):
        """Test that the wildcard origin is the development default."""
        assert make_settings().cors_origins == ["*"]

    def test_wildcard_rejected_in_production(self):
        """Test that a wildcard origin cannot be deployed to production."""
        with pytest.raises(ValidationError, match="Wildcard CORS origin"):
            make_settings(environment="production")

    def test_explicit_origins_allowed_in_production(self):
        """Test that explicit origins pass in production."""
        s = make_settings(environment="production", cors_allow_origins="https://app.example.com")
        assert s.cors_origins == ["https://app.example.com"]

    async def test_middleware_uses_parsed_origins(self):
        """Test that parsed origins drive the CORS middleware."""
        s = make_settings(cors_allow_origins="https://app.example.com")
        app = FastAPI()
        app.add_middleware(
            CORSMiddleware,
            allow_origins=s.cors_origins,
            allow_methods=s.cors_methods,
            allow_headers=s.cors_headers,
        )

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            allowed = await ac.get("/ping", headers={"origin": "https://app.example.com"})
            blocked = await ac.get("/ping", headers={"origin": "https://evil.example.com"})

        assert allowed.headers["access-control-allow-origin"] == "https://app.example.com"
        assert "access-control-allow-origin" not in blocked.headers
