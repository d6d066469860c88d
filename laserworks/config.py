"""Centralized application configuration using Pydantic settings."""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration for the API."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = Field(default="Deadeye Laserworks API", description="Title shown in the OpenAPI docs")
    database_url: str = Field(
        default="sqlite:///./laserworks.db",
        description="SQLAlchemy database URL. Defaults to local SQLite for development.",
    )
    run_db_migrations: bool = Field(
        default=False,
        description="Whether the app should create database tables on startup.",
    )
    secret_key: str = Field(default="secret-dev", description="Signing secret for auth tokens")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        description="Auth token lifetime in minutes; 0 issues tokens without expiry",
    )
    email_secret_key: str = Field(default="email-secret-dev", description="Signing secret for e-mail confirmation links")
    email_token_expire_minutes: int = Field(default=60 * 24, description="Confirmation link lifetime in minutes")
    password_hash_rounds: int = Field(default=29000, description="PBKDF2 work factor used for password hashes")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    default_rate_limit: str = Field(default="60/minute", description="Global rate limiting rule")
    login_rate_limit: str = Field(default="10/minute", description="Limit on /auth/token per client")
    register_rate_limit: str = Field(default="5/minute", description="Limit on /auth/register per client")
    rate_limiting_enabled: bool = Field(default=True, description="Toggle to disable SlowAPI limits (useful in tests)")
    metrics_enabled: bool = Field(default=True, description="Expose Prometheus metrics on /metrics")
    log_dir: str = Field(default="logs", description="Directory for the HTTP audit log")
    host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")
    port: int = Field(default=8000, description="Port uvicorn listens on")

    mail_enabled: bool = Field(default=False, description="Send confirmation e-mails over SMTP instead of logging them")
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: str = ""
    mail_from: str = "noreply@deadeyelaserworks.com"
    verification_url: str = Field(
        default="http://localhost:5173/email-verification/{token}",
        description="Confirmation link template; {token} is replaced with the e-mail token",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the Settings object."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the cached Settings instance (useful for tests)."""

    get_settings.cache_clear()
