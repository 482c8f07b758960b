from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


@lru_cache()
def get_settings():
    return Settings()


class Settings(BaseSettings):
    DATABASE_CONNECTION_STRING: str = "sqlite:///fitbook.db"
    IS_DEVELOPMENT: bool = False
    LOG_LEVEL: Optional[str] = None
    # class schedules are wall-clock times in this zone
    TIMEZONE: str = "Europe/Oslo"

    JWT_SECRET: Optional[str] = None
    JWT_ALGORITHMS: list[str] = ["HS256"]
    JWT_AUDIENCE: Optional[str] = None
    JWT_ISSUER: Optional[str] = None

    ALLOWED_ORIGINS: list[str] = []
    UPLOADS_DIR: str = "uploads"

    REMINDERS_ENABLED: bool = True
    REMINDER_INTERVAL_SECONDS: int = 60
    REMINDER_WINDOW_MINUTES: int = 5

    model_config = SettingsConfigDict(
        env_file=[find_dotenv("fitbook.env")],
        env_file_encoding="utf-8",
        extra="ignore",
    )
