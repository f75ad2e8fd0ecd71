from __future__ import annotations

import os
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mockprep.core.paths import env_files


class Settings(BaseSettings):
    app_name: str = "MockPrep Scheduling"
    environment: str = "development"

    database_url: str = "sqlite+aiosqlite:///./mockprep.db"

    # Every calendar-day computation (availability reads and booking writes) uses this zone.
    schedule_timezone: str = "UTC"
    default_duration_minutes: int = 30

    auth_mode: Literal["dev", "firebase"] = "dev"
    firebase_project_id: str = Field(
        default="",
        validation_alias=AliasChoices("MP_FIREBASE_PROJECT_ID", "FIREBASE_PROJECT_ID"),
    )
    google_clock_skew_seconds: int = 180

    internal_api_key: str = ""
    internal_api_allow_localhost: bool = True

    schedule_rate_limit_per_min: int = 10
    schedule_rate_limit_window_seconds: int = 60

    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    model_config = SettingsConfigDict(
        env_prefix="MP_",
        env_file=env_files(os.getenv("MP_ENVIRONMENT", "")),
        extra="ignore",
    )

    @field_validator("schedule_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        value = (value or "").strip() or "UTC"
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @property
    def schedule_tz(self) -> ZoneInfo:
        return ZoneInfo(self.schedule_timezone)


settings = Settings()
