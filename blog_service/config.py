"""
Configuration management for the blog service
"""
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """Blog service configuration loaded from environment variables"""

    # Token signing. No default: the service must not start without a secret.
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./blog.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Password hashing
    HASH_ROUNDS: int = 29000
    HASH_WORKERS: int = 4

    # access_token cookie
    COOKIE_SECURE: bool = True

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("JWT_SECRET")
    @classmethod
    def secret_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("JWT_SECRET must not be empty")
        return value

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def symmetric_algorithm(cls, value: str) -> str:
        if value not in HMAC_ALGORITHMS:
            raise ValueError(f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}")
        return value

    @field_validator("HASH_WORKERS", "HASH_ROUNDS")
    @classmethod
    def positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be a positive integer")
        return value


# Global settings instance
settings = Settings()
