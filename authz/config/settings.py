"""Application configuration using Pydantic settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MATRIX_PATH = Path(__file__).with_name("authorization_matrix.json")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API Configuration
    API_TITLE: str = "Authorization Decision API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Role/scope authorization decisions for multi-tenant task management"
    API_PREFIX: str = "/api/v1"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = Field(default=False, description="Expose unexpected error details in 500 responses")

    # Authorization matrix shared with the enforcing server
    AUTHORIZATION_MATRIX_PATH: Path = Field(
        default=DEFAULT_MATRIX_PATH,
        description="JSON file holding the permission matrix and ownership fields",
    )

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(
        default="test-jwt-secret-key-super-long-for-testing-purposes-only",
        min_length=32,
        description="Secret key for JWT tokens",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "platform-auth"
    JWT_AUDIENCE: str = "platform-api"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    # Monitoring
    LOG_LEVEL: str = "INFO"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level name."""
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Global settings instance
settings = Settings()
