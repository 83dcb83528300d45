"""Application configuration from environment."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Gym Tracker"
    debug: bool = False
    log_level: str = "INFO"

    # Database (async driver; Alembic converts to a sync URL)
    database_url: str = "sqlite+aiosqlite:///./gym_tracker.db"

    # Server-side session, referenced by an opaque cookie
    auth_cookie_name: str = "gym_session"
    auth_cookie_max_age: int = 60 * 60 * 24 * 7  # 7 days
    auth_cookie_secure: bool = False

    # Upper bound for a single request, seconds
    request_timeout_seconds: float = 30.0

    # Empty -> CORS middleware is not installed
    cors_allow_origins: list[str] = []

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
