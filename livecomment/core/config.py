"""Application configuration settings.

All configuration values are loaded from environment variables (.env file).
No sensitive values should be hardcoded here.
"""

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    PROJECT_NAME: str = "Livecomment API"
    VERSION: str = "0.1.0"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./livecomment.db"
    DATABASE_ECHO: bool = False

    # Session verification - REQUIRED (tokens are issued by the login service)
    SECRET_KEY: str
    SESSION_TTL_SECONDS: int = 3600

    # Avatar served for users who never uploaded an icon
    FALLBACK_AVATAR_PATH: str = "img/NoImage.jpg"

    # Optional upper bound applied to ?limit= on comment listings
    COMMENT_LIST_MAX_LIMIT: Optional[int] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # CORS
    CORS_ORIGINS: list[str] = []

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
