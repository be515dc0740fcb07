"""
Application configuration.
Settings come from COMPOUND_* environment variables or a .env file at the
project root (environment variables take precedence).
"""
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 5000
    DEBUG: bool = False

    # CORS (frontend dev servers)
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Rate sweep defaults used when a request leaves them out
    RATE_SWEEP_STEP: float = Field(0.5, gt=0)
    DEFAULT_VARIANCE_RANGE: float = Field(2.0, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="COMPOUND_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
