"""
Configuration Management for Finance Dashboard

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Both the API server and the Streamlit client read their knobs from
this module, so every tunable lives in one place.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    API server settings.

    Loads configuration from FINANCE_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Storage
    seed_sample_data: bool = Field(
        default=True,
        description="Load the demo categories and transactions at startup"
    )

    # HTTP
    api_prefix: str = Field(
        default="/api",
        description="Prefix all API routes are mounted under"
    )
    cors_origins: str = Field(
        default="http://localhost:8501,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)

    # Analytics
    default_months: int = Field(
        default=6,
        ge=1,
        description="Months returned by the monthly chart when none is requested"
    )
    max_months: int = Field(
        default=120,
        ge=1,
        description="Upper bound accepted for the months query parameter"
    )

    # Audit
    audit_history_size: int = Field(
        default=500,
        ge=0,
        description="How many audit events are kept in memory"
    )

    @field_validator('api_prefix')
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing slash."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


class ClientSettings(BaseSettings):
    """Settings for the HTTP client used by the Streamlit dashboard."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    api_base_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the finance API, prefix included"
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout"
    )
    retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for requests failing with a connection error"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def client(self) -> ClientSettings:
        return ClientSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the sections that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("app", "client"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
