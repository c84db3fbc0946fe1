"""Application configuration from environment."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Empathy Trainer"
    debug: bool = False
    log_level: str = "INFO"

    # Database (async driver; alembic converts to the sync one)
    database_url: str = "sqlite+aiosqlite:///./empathy_training.db"

    # Challenge engine
    daily_response_cap: int = 3  # responses counted per calendar date
    random_seed: int | None = None  # fixed seed makes scenario selection reproducible

    class Config:
        env_prefix = "EMPATHY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


# Base path (parent of empathy_trainer/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
