"""API configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    database_url: str = "postgresql+asyncpg://localhost:5432/sky_ranker"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # Ranking
    default_top_n: int = 10
    max_top_n: int = 50  # never above the engine's own ceiling
    top_n_by_stage: bool = False  # 5/3/1 offers by personalization stage

    model_config = SettingsConfigDict(
        env_prefix="API_", env_file=".env", extra="ignore"
    )


settings = ApiSettings()
