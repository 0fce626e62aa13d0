"""Application settings and configuration."""

import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = {"HS256", "HS384", "HS512"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application (hardcoded constants)
    app_name: str = "Ika API"
    app_version: str = "0.1.0"

    # Environment-specific settings
    debug: bool = False
    environment: str  # development, staging, production

    # Database
    database_url: str
    database_pool_size: int = 10
    database_max_overflow: int = 20
    database_pool_timeout: int = 30
    database_pool_recycle: int = 3600
    database_echo: bool = False
    database_auto_create: bool = False

    # API
    api_prefix: str = "/api"

    # CORS
    cors_allow_origins: str = "*"
    cors_allow_methods: str = "GET, POST, PUT, DELETE, OPTIONS, PATCH"
    cors_allow_headers: str = "Accept, Authorization, Content-Type, X-CSRF-Token"
    cors_allow_credentials: bool = False
    cors_max_age: int = 600

    # Security
    secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "ika"
    access_token_expire_minutes: int = 60
    refresh_token_expire_days: int = 60

    # Rate limiting
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production"}
        env = str(v).lower()
        if env not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}, got {env}")
        return env

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """The signing secret must be provided by the environment."""
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("jwt_algorithm", mode="before")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only symmetric HMAC algorithms are supported for session tokens."""
        algorithm = str(v).upper()
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"JWT algorithm must be one of {sorted(HMAC_ALGORITHMS)}, got {algorithm}")
        return algorithm

    @model_validator(mode="after")
    def validate_cors_for_production(self) -> "Settings":
        """Reject wildcard origins outside development and staging."""
        if self.environment == "production" and "*" in self.cors_origins:
            raise ValueError("Wildcard CORS origin is not allowed in production")
        return self

    @staticmethod
    def _split(value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def cors_origins(self) -> list[str]:
        return self._split(self.cors_allow_origins)

    @property
    def cors_methods(self) -> list[str]:
        return self._split(self.cors_allow_methods)

    @property
    def cors_headers(self) -> list[str]:
        return self._split(self.cors_allow_headers)

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite (no connection pool tuning)."""
        return self.database_url.startswith("sqlite")


settings = Settings()  # type: ignore[call-arg]
