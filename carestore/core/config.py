from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    APP_NAME: str = "carestore"
    ENV: Literal["local", "dev", "prod"] = "local"
    API_PREFIX: str = "/api/v1"

    # DB (single local file; the store is authoritative for one device)
    DATABASE_URL: str = "sqlite+aiosqlite:///./carestore.db"
    SQLITE_BUSY_TIMEOUT_MS: int = 5000

    # Paging
    DEFAULT_LOG_PAGE_SIZE: int = 5
    MAX_PAGE_SIZE: int = 500

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None  # overrides the ENV-derived level

    @field_validator("DATABASE_URL")
    @classmethod
    def _must_aiosqlite(cls, v: str):
        if not v.startswith("sqlite+aiosqlite://"):
            raise ValueError("DATABASE_URL must use the aiosqlite driver (sqlite+aiosqlite:///...)")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return (v.strip().upper() or None) if isinstance(v, str) else v

    @field_validator("DEFAULT_LOG_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def _positive(cls, v: int):
        if v < 1:
            raise ValueError("page sizes must be >= 1")
        return v

settings = Settings()
