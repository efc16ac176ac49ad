"""
Application configuration using Pydantic Settings
"""
from datetime import timedelta
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fintrack.auth import TokenConfig


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    """
    # Database
    DATABASE_URL: str = "sqlite:///./data/tracker.db"

    # Security
    SECRET_KEY: str = "your-secret-key-change-in-production"  # Override in production!
    TOKEN_EXPIRATION_HOURS: int = 24

    # Server
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080

    # Application
    ENVIRONMENT: str = "development"
    TIMEZONE: str = "UTC"
    DEBUG: bool = False

    # Dashboard
    DASHBOARD_DAYS: int = Field(30, ge=1, le=365)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_sqlalchemy_url(self) -> str:
        """
        Convert DATABASE_URL to SQLAlchemy format (postgresql+psycopg://)
        """
        url = self.DATABASE_URL
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+psycopg://", 1)
        return url

    def token_config(self) -> TokenConfig:
        """Signing key and token lifetime for the credential service"""
        return TokenConfig(
            secret_key=self.SECRET_KEY,
            lifetime=timedelta(hours=self.TOKEN_EXPIRATION_HOURS),
        )


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings instance (singleton)
    """
    return Settings()
