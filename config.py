"""
Centralised settings loader (pydantic-settings).

Values come from the environment or a local `.env` file.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = "local"
    host: str = "0.0.0.0"
    port: int = 3000

    # ─── storage ─────────────────────────────────────────────────────
    # MONGODB_URI is still honoured so old deployment configs keep working
    database_url: str = Field(
        "sqlite+aiosqlite:///./exercise_tracker.db",
        validation_alias=AliasChoices("DATABASE_URL", "MONGODB_URI", "database_url"),
    )

    # ─── logging / http ─────────────────────────────────────────────
    log_level: str = "INFO"
    log_file: str | None = None
    cors_origins: list[str] = ["*"]

    # ─── exercise log ───────────────────────────────────────────────
    default_log_limit: int = Field(500, gt=0)

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> Settings:  # pragma: no cover
    return Settings()  # type: ignore[call-arg]


settings: Settings = _cached()
