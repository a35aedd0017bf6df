"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.

Grouped settings use ``__`` as the nesting delimiter, e.g. ``OPENAI__API_KEY``
maps to ``settings.openai.api_key``.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class OpenAIConfig(BaseModel):
    """Chat-completion upstream configuration."""

    api_key: Optional[str] = Field(default=None, description="API key for the completion upstream")
    model: str = Field(default="gpt-3.5-turbo", description="Model requested from the completion upstream")
    base_url: str = Field(default="https://api.openai.com/v1", description="Completion API base URL")
    timeout_seconds: float = Field(default=60.0, description="Upstream request timeout in seconds")


class ResendConfig(BaseModel):
    """Email delivery (Resend) configuration."""

    api_key: Optional[str] = Field(default=None, description="Resend API key")
    base_url: str = Field(default="https://api.resend.com", description="Resend API base URL")
    from_address: str = Field(
        default="Mindful Heaven <onboarding@resend.dev>", description="Sender used for outgoing email"
    )
    timeout_seconds: float = Field(default=15.0, description="Email API request timeout in seconds")


class AuthConfig(BaseModel):
    """Access token and credential policy configuration."""

    jwt_secret: str = Field(default="change-me-in-production", description="Secret used to sign access tokens")
    jwt_algorithm: str = Field(default="HS256", description="Access token signing algorithm")
    access_token_expire_minutes: int = Field(default=60 * 24, description="Access token lifetime in minutes")
    min_password_length: int = Field(default=6, description="Minimum accepted password length")


class StorageConfig(BaseModel):
    """Object storage configuration."""

    root_dir: str = Field(default="storage", description="Directory holding the storage buckets")
    public_base_url: str = Field(
        default="http://localhost:8000", description="Base URL used to build public object URLs"
    )
    max_image_bytes: int = Field(default=5 * 1024 * 1024, description="Upper bound for uploaded images")
    max_video_bytes: int = Field(default=50 * 1024 * 1024, description="Upper bound for uploaded videos")


class PasswordResetConfig(BaseModel):
    """One-time-code password reset configuration."""

    code_length: int = Field(default=6, description="Number of digits in a one-time code")
    code_ttl_minutes: int = Field(default=10, description="Minutes before a one-time code expires")


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(default=True, description="Allow credentials in CORS requests")
    allow_methods: list[str] = Field(default=["*"], description="Allowed HTTP methods (use * for all)")
    allow_headers: list[str] = Field(default=["*"], description="Allowed HTTP headers (use * for all)")


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    # =====================================================================
    # Mindful Heaven Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Server host address to bind to",
        alias="MINDFUL_HEAVEN_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Server port number",
        alias="MINDFUL_HEAVEN_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Server logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="MINDFUL_HEAVEN_LOG_LEVEL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./mindful_heaven.db",
        description="Async connection URL for the application database",
        alias="DATABASE_URL",
    )
    auto_create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (disable when Alembic manages the schema)",
        alias="AUTO_CREATE_TABLES",
    )

    # =====================================================================
    # Grouped Configurations
    # =====================================================================
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig, alias="OPENAI")
    resend: ResendConfig = Field(default_factory=ResendConfig, alias="RESEND")
    auth: AuthConfig = Field(default_factory=AuthConfig, alias="AUTH")
    storage: StorageConfig = Field(default_factory=StorageConfig, alias="STORAGE")
    password_reset: PasswordResetConfig = Field(default_factory=PasswordResetConfig, alias="PASSWORD_RESET")
    cors: CORSConfig = Field(default_factory=CORSConfig, alias="CORS")


settings = Settings()
