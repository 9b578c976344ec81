"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .catalog import GENRES
from .utils import slugify


DEFAULT_FALLBACK_GENRE = "Feel Good"


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Desi Cinephile", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    openrouter_api_key: str | None = Field(
        default=None, alias="OPENROUTER_API_KEY"
    )
    openrouter_model: str = Field(
        default="google/gemini-2.5-flash", alias="OPENROUTER_MODEL"
    )
    openrouter_api_url: HttpUrl = Field(
        default="https://openrouter.ai/api/v1", alias="OPENROUTER_API_URL"
    )

    reveal_steps: int = Field(default=12, alias="REVEAL_STEPS", ge=1, le=100)
    reveal_interval_ms: int = Field(
        default=80, alias="REVEAL_INTERVAL_MS", ge=0, le=2_000
    )

    extra_cache_ttl_seconds: int = Field(
        default=300, alias="EXTRA_CACHE_TTL", ge=1, le=86_400
    )
    extra_cache_capacity: int = Field(
        default=50, alias="EXTRA_CACHE_CAPACITY", ge=1, le=10_000
    )

    fallback_genre: str = Field(
        default=DEFAULT_FALLBACK_GENRE, alias="FALLBACK_GENRE"
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("fallback_genre", mode="before")
    @classmethod
    def _resolve_fallback_genre(cls, value: object) -> str:
        """Accept a genre name or slug and normalise it to the display name."""

        if value is None:
            return DEFAULT_FALLBACK_GENRE
        cleaned = str(value).strip()
        if not cleaned:
            return DEFAULT_FALLBACK_GENRE
        by_slug = {genre.slug: genre.name for genre in GENRES}
        name = by_slug.get(slugify(cleaned))
        if name is None:
            raise ValueError("Unknown fallback genre configured")
        return name

    @property
    def reveal_interval_seconds(self) -> float:
        return self.reveal_interval_ms / 1000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
