"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PEPPER = "change-me-pepper"  # noqa: S105
DEFAULT_HMAC_KEY = "change-me-hmac-key"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./picturebook.db")

    # Secrets
    pepper: str = Field(default=DEFAULT_PEPPER)  # appended to every password before hashing
    hmac_key: str = Field(default=DEFAULT_HMAC_KEY)  # keys the remember token hash

    environment: str = Field(default="development")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production":
            if self.pepper == DEFAULT_PEPPER:
                raise ValueError("PEPPER must be changed in production")
            if self.hmac_key == DEFAULT_HMAC_KEY:
                raise ValueError("HMAC_KEY must be changed in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not point at SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
