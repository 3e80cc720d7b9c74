"""
Application Configuration

Centralized configuration management using Pydantic settings.
Loads from environment variables with fallback to .env file.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Note: get_settings() is cached, so tests that need different values
    must call get_settings.cache_clear() after changing the environment.
    """

    # Database settings
    DATABASE_URL: str = "sqlite:///./notes.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40
    # Seconds a SQLite writer waits for the database lock
    DATABASE_BUSY_TIMEOUT: float = 30.0

    # Security settings
    # SECRET_KEY has no default: it must come from the environment or .env
    SECRET_KEY: str
    # Secrets still accepted for verification during a rotation, newest first
    PREVIOUS_SECRET_KEYS: List[str] = []
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    # Plans
    FREE_PLAN_NOTE_LIMIT: int = 3

    # Application settings
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    SEED_ON_STARTUP: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def signing_secrets(self) -> List[str]:
        """Current secret first, then the ones kept for rotation."""
        return [self.SECRET_KEY] + [s for s in self.PREVIOUS_SECRET_KEYS if s]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only instantiate settings once.
    """
    return Settings()
