from __future__ import annotations

import getpass
import locale
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "operator"


def _default_locale() -> str:
    language, _ = locale.getlocale()
    if not language:
        return "en"
    return language.split("_")[0].lower()


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True, env_prefix=""
    )

    admin_user: str = Field(default_factory=_default_user, alias="ADMIN_USER")
    locale: str = Field(default_factory=_default_locale, alias="ADMINTOOLS_LOCALE")
    default_group: Optional[str] = Field(None, alias="DEFAULT_GROUP")
    output_dir: Path = Field(Path("output"), alias="OUTPUT_DIR")
    timezone: str = Field("Europe/Moscow", alias="TIMEZONE")
    log_level: str = Field("WARNING", alias="LOG_LEVEL")

    @field_validator("admin_user")
    def validate_user(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("ADMIN_USER must not be empty")
        return cleaned

    @field_validator("default_group")
    def validate_group(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("log_level")
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
