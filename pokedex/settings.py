"""
Runtime settings for the Pokédex service.

Defaults point at the public PokeAPI and the PokeAPI sprite repository.
Every field can be overridden with an environment variable named
``POKEDEX_<FIELD>`` (for example ``POKEDEX_INDEX_LIMIT=30``); empty
variables are ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Immutable configuration shared by the loader, resolver and router."""

    model_config = SettingsConfigDict(
        env_prefix="POKEDEX_", env_ignore_empty=True, frozen=True, extra="ignore"
    )

    api_base_url: str = "https://pokeapi.co/api/v2"
    sprite_url_template: str = (
        "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"
    )
    index_limit: int = Field(default=151, ge=1)
    request_timeout: float = Field(default=10.0, gt=0)
    user_agent: str = "pokedex-browser/1.0"
    # Upper bound on in-flight enrichment requests during a load.
    enrichment_concurrency: int = Field(default=20, ge=1)
    default_page_size: int = Field(default=24, ge=1)
    max_page_size: int = Field(default=200, ge=1)
    load_on_startup: bool = True
    log_level: LogLevel = "INFO"

    @field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value
