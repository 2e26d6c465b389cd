"""
Configuration settings for the Pokedex browser.

Uses Pydantic Settings to load environment variables for the upstream API
location, the batch size of the initial load, pagination defaults and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pokedex.domain.models import PAGE_SIZE_CHOICES


class Settings(BaseSettings):
    # Upstream API
    api_base_url: str = Field("https://pokeapi.co/api/v2", alias="POKEDEX_API_BASE_URL")
    resource: str = Field("pokemon", alias="POKEDEX_RESOURCE")
    batch_limit: int = Field(100, ge=1, alias="POKEDEX_BATCH_LIMIT")
    # None disables the client timeout entirely.
    http_timeout: Optional[float] = Field(None, alias="POKEDEX_HTTP_TIMEOUT")

    # Presentation
    default_page_size: int = Field(10, alias="POKEDEX_PAGE_SIZE")

    # Logging
    log_level: str = Field("WARNING", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("default_page_size")
    @classmethod
    def _page_size_is_offered(cls, value: int) -> int:
        if value not in PAGE_SIZE_CHOICES:
            raise ValueError(f"POKEDEX_PAGE_SIZE must be one of {PAGE_SIZE_CHOICES}")
        return value

    @property
    def list_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.resource.strip('/')}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
