# doctor_schedule/core/config.py
import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict
from typing import List
from functools import lru_cache

from ..scheduling.calendar_config import CalendarConfig

DEFAULT_FIXTURES_PATH = str(Path(__file__).resolve().parent.parent / "data" / "fixtures.json")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "Doctor Schedule API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 8000))

    # Calendar window shared by the day and week views
    CALENDAR_START_HOUR: int = Field(default=8, ge=0, le=23)
    CALENDAR_END_HOUR: int = Field(default=18, ge=1, le=24)
    CALENDAR_SLOT_DURATION_MINUTES: int = Field(default=30, gt=0)
    SLOT_LABEL_FORMAT: str = "%I:%M %p"

    # Fixture data loaded once at startup
    FIXTURES_PATH: str = DEFAULT_FIXTURES_PATH

    # CORS Settings (comma-separated)
    ALLOWED_ORIGINS: str = "*"

    # Middleware settings
    GZIP_MIN_SIZE: int = 500  # bytes

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @model_validator(mode="after")
    def _check_calendar_window(self) -> "Settings":
        if self.CALENDAR_START_HOUR >= self.CALENDAR_END_HOUR:
            raise ValueError("CALENDAR_START_HOUR must be earlier than CALENDAR_END_HOUR")
        return self

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def get_calendar_config(s: Settings) -> CalendarConfig:
    return CalendarConfig(
        start_hour=s.CALENDAR_START_HOUR,
        end_hour=s.CALENDAR_END_HOUR,
        slot_duration_minutes=s.CALENDAR_SLOT_DURATION_MINUTES,
        label_format=s.SLOT_LABEL_FORMAT,
    )


settings: Settings = get_settings()
