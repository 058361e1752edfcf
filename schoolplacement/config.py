from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCHOOLPLACEMENT_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    # empty database_url keeps every table in memory
    database_url: str = ""
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    log_to_file: bool = False
    student_requires_ministry: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()


def load_settings(env_file: Optional[Path] = None) -> Settings:
    # process environment wins over the .env file
    if env_file is not None:
        return Settings(_env_file=env_file)
    return Settings()
