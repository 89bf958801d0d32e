# worldbuilder/config.py
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/tide.db"

    # API configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Session cookie
    SESSION_SECRET: str = "dev-secret-please-change"
    SESSION_COOKIE_NAME: str = "st_session"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 7
    SESSION_COOKIE_SECURE: bool = False

    # Worldbuilding defaults
    DEFAULT_ERA_COLOR: str = "#8b5cf6"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
