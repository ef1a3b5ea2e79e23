"""
Application Settings - Environment-driven configuration
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-do-next-development-secret"

class Settings(BaseSettings):
    """
    All settings can be overridden with environment variables of the same name
    or with a local .env file.
    """
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "DoNext Task Tracker"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # development | production | test
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./do_next.db"
    DB_POOL_SIZE: int = 5  # Persistent connections (ignored for SQLite)
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # Seconds
    AUTO_CREATE_TABLES: bool = True  # Production should use migrations instead

    # Security
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance - environment is read once per process"""
    return Settings()

settings = get_settings()

def is_production() -> bool:
    return settings.ENVIRONMENT.lower() == "production"

def validate_config() -> None:
    """
    Fail fast on unsafe settings.

    Raises:
        ValueError: if production runs with a weak secret or debug mode
    """
    if settings.ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
        raise ValueError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
    if not is_production():
        return
    if settings.SECRET_KEY == DEFAULT_SECRET_KEY:
        raise ValueError("SECRET_KEY must be set in production")
    if len(settings.SECRET_KEY.encode()) < 32:
        raise ValueError("SECRET_KEY must be at least 32 bytes for HS256")
    if settings.DEBUG:
        raise ValueError("DEBUG must be disabled in production")
