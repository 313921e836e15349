"""Application settings using Pydantic."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sessionflash.flash import FLASH_META_KEY


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = Field(default="Flash Messages")
    env: str = Field(default="dev")
    debug: bool = Field(default=True)
    log_level: str = Field(default="INFO")

    secret_key: str = Field(default="dev-insecure-secret")
    session_cookie: str = Field(default="session")
    session_max_age: int = Field(default=24 * 60 * 60)
    flash_meta_key: str = Field(default=FLASH_META_KEY)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FLASH_",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
