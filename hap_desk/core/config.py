# hap_desk/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Overrides ~/.hap/hap.db when set
    HAP_DB_PATH: str | None = Field(default=None)
    APP_NAME: str = "HAP Desk"
    APP_DESC: str = "Local approval desk for agent tickets"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Comma separated; "*" allows all
    CORS_ORIGINS: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def db_path(self) -> Path:
        if self.HAP_DB_PATH:
            return Path(self.HAP_DB_PATH).expanduser()
        return Path.home() / ".hap" / "hap.db"

    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
