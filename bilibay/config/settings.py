from decimal import Decimal
from typing import Any

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from the environment (and an optional .env file).
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "BiliBay Marketplace API"
    PROJECT_DESCRIPTION: str = "REST API for the BiliBay buyer/seller marketplace"
    VERSION: str = "1.0.0"

    # PostgreSQL Database Settings
    DATABASE_URL: str | None = Field(None, description="Full async database URL, overrides the DB_* parts")
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("bilibay", description="Database name")
    DB_USER: str = Field("postgres", description="PostgreSQL user")
    DB_PASSWORD: str | None = Field(None, description="PostgreSQL password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(10, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(20, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections every N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Seconds to wait for a pooled connection")

    # JWT Settings
    JWT_SECRET_KEY: str = Field(..., description="Secret key used to sign access tokens")
    JWT_ALGORITHM: str = Field("HS256", description="JWT signing algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24, description="Access token lifetime in minutes")
    RESET_TOKEN_EXPIRE_MINUTES: int = Field(60, description="Password reset token lifetime in minutes")

    # Marketplace rules
    CURRENCY: str = Field("PHP", description="ISO currency code for all prices")
    SHIPPING_FEE: Decimal = Field(Decimal("10.00"), description="Flat shipping fee below the free threshold")
    FREE_SHIPPING_THRESHOLD: Decimal = Field(Decimal("50.00"), description="Subtotal that unlocks free shipping")
    LOW_STOCK_THRESHOLD: int = Field(10, description="Stock level reported as low on the admin dashboard")
    DEFAULT_PAGE_SIZE: int = Field(20, description="Default page size for listings")
    MAX_PAGE_SIZE: int = Field(100, description="Upper bound for the limit query parameter")

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = Field(True, description="Enable per-IP rate limiting")
    RATE_LIMIT_WINDOW_SECONDS: int = Field(15 * 60, description="Sliding window size in seconds")
    AUTH_RATE_LIMIT: int = Field(20, description="Requests per window on /auth endpoints")
    API_RATE_LIMIT: int = Field(100, description="Requests per window on all other endpoints")
    FORWARDED_ALLOW_IPS: str = Field("127.0.0.1", description="Proxies trusted to set X-Forwarded-For")

    # Email (password reset / verification)
    SMTP_SERVER: str = Field("smtp.gmail.com", description="SMTP host")
    SMTP_PORT: int = Field(587, description="SMTP port")
    SMTP_USERNAME: str | None = Field(None, description="SMTP user, email delivery is skipped when unset")
    SMTP_PASSWORD: str | None = Field(None, description="SMTP password")
    EMAIL_FROM: str = Field("no-reply@bilibay.ph", description="Sender address")
    FRONTEND_URL: str = Field("http://localhost:5173", description="Base URL used in emailed links")

    # CORS
    CORS_ORIGINS: list[str] = Field(default=["http://localhost:5173"], description="Allowed CORS origins")

    # Application Settings
    DEBUG: bool = Field(False, description="Debug mode")
    ENVIRONMENT: str = Field("production", description="Runtime environment")
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("plain", description="Log format: plain, colored or json")

    # Sentry Configuration
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN for error tracking")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value):
        if isinstance(value, str) and not value.startswith("["):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("SHIPPING_FEE", "FREE_SHIPPING_THRESHOLD")
    @classmethod
    def validate_non_negative_amount(cls, v):
        if v < 0:
            raise ValueError("Amounts must not be negative")
        return v

    @computed_field
    @property
    def async_database_url(self) -> str:
        """Async SQLAlchemy URL (asyncpg driver unless DATABASE_URL says otherwise)."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_PASSWORD:
            return (
                f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
                f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            )
        return f"postgresql+asyncpg://{self.DB_USER}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def is_development(self) -> bool:
        """True for local/dev environments."""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]

    @computed_field
    @property
    def rate_limit_active(self) -> bool:
        """Rate limiting is skipped in development."""
        return self.RATE_LIMIT_ENABLED and self.ENVIRONMENT.lower() not in ["development", "dev", "local"]


# Singleton for configuration
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.

    Avoids re-reading the environment on every call.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
