"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class KakaoLocalSettings(BaseModel):
    api_key: SecretStr | None = Field(
        default=None,
        description="Kakao REST API key sent as `KakaoAK <key>`.",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        le=120,
        description="Per-request timeout; httpx's default applies when unset.",
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RequestLimitSettings(BaseModel):
    max_requests: int = Field(default=5, ge=0)
    interval_seconds: int = Field(default=10, ge=1)


class NearEatSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NEAREAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    telegram_token: SecretStr
    telegram_proxy: str | None = None
    default_language: str = "ko"
    max_search_sessions: int = Field(default=10_000, ge=1)

    kakao: KakaoLocalSettings = Field(default_factory=KakaoLocalSettings)
    request_limit: RequestLimitSettings = Field(default_factory=RequestLimitSettings)


@lru_cache
def get_settings() -> NearEatSettings:
    """Return cached settings instance."""

    return NearEatSettings()  # type: ignore[call-arg]


__all__ = [
    "KakaoLocalSettings",
    "NearEatSettings",
    "RequestLimitSettings",
    "get_settings",
]
