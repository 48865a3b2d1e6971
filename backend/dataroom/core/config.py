from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class Settings(BaseSettings):
    project_name: str = "Dataroom Uploader"

    vdr_base_url: str = Field(
        default="https://gateway.idealsvdr.com/api/v1",
        description="Base URL of the virtual data room gateway",
    )
    vdr_api_key: str | None = Field(default=None, description="API key sent as the Authorization header")

    chunk_size: int = Field(default=20 * MIB, ge=1)
    single_upload_threshold: int = Field(default=20 * MIB, ge=0)
    request_timeout_seconds: float = Field(default=120.0, gt=0)

    database_url: str = Field(
        default="sqlite+aiosqlite:///./dataroom.db",
        description="SQLAlchemy async database URL for folder mappings",
    )

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("vdr_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return str(value).rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return str(value).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
