from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the HTTP adapter, loaded from environment variables or a ``.env`` file."""

    # report str(exc) instead of "internal_error" for unhandled exceptions
    EXPOSE_INTERNAL_ERRORS: bool = False
    VALIDATION_ERROR_STATUS: int = 422

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


settings = Settings()


def get_settings() -> Settings:
    return settings
